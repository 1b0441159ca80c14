"""Lecteur Odyssey : pagination du texte et commentaires générés par IA."""

__version__ = "0.1.0"
