import threading

import pytest

from odyssey_reader.core.config import DEFAULT_PROMPTS
from odyssey_reader.services.commentary import (
    AnalysisKind,
    CommentaryStore,
    build_definition_prompt,
    build_page_prompt,
    build_question_prompt,
    build_selection_prompt,
    selection_context,
)
from odyssey_reader.services.paginator import Page


def _page(text, number=4, book=2):
    return Page(book_title=f"Book {book}", book_number=book, text=text, number=number)


def test_records_are_filtered_by_page_in_insertion_order():
    store = CommentaryStore()
    a = store.append(AnalysisKind.page, 1, "p1")
    store.append(AnalysisKind.page, 2, "p2")
    b = store.append(AnalysisKind.selection, 1, "s1", selection="Ulysses")
    c = store.append(AnalysisKind.page, 1, "p1 again")

    assert store.for_page(1) == [a, b, c]
    assert [r.page for r in store.for_page(2)] == [2]
    assert store.for_page(3) == []
    assert len(store) == 4


def test_concurrent_appends_are_all_counted():
    store = CommentaryStore()

    def worker(page):
        for _ in range(200):
            store.append(AnalysisKind.page, page, "x")
            len(store)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(1, 5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 800
    assert len(store.all()) == 800
    assert all(len(store.for_page(n)) == 200 for n in range(1, 5))


def test_records_are_immutable():
    record = CommentaryStore().append(AnalysisKind.question, 1, "answer", question="Who?")
    with pytest.raises(AttributeError):
        record.content = "changed"


def test_page_prompt_substitutes_text():
    prompt = build_page_prompt(DEFAULT_PROMPTS["PAGE_ANALYSIS"], _page("Sing to me of the man"))
    assert "Sing to me of the man" in prompt
    assert "{TEXT}" not in prompt


def test_selection_context_windows_are_capped():
    text = "a" * 300 + "Penelope" + "b" * 300
    before, after = selection_context(text, "Penelope")
    assert before == "a" * 200
    assert after == "b" * 200


def test_selection_context_uses_first_occurrence():
    # "Penelope" au mot 10 puis au mot 300 : le contexte entoure la première
    words = [f"w{i}" for i in range(400)]
    words[10] = "Penelope"
    words[300] = "Penelope"
    text = " ".join(words)

    before, after = selection_context(text, "Penelope")
    assert before.endswith("w8 w9 ")
    assert after.startswith(" w11 w12")
    assert "w299" not in before


def test_selection_context_not_found():
    assert selection_context("some page text", "absent") == ("", "")


def test_selection_prompt_fills_placeholders():
    page = _page("before words SELECTED after words", book=7)
    prompt = build_selection_prompt(DEFAULT_PROMPTS["SELECTION_ANALYSIS"], page, "SELECTED")
    assert "Book 7" in prompt
    assert "before words \n" in prompt
    assert "SELECTED" in prompt
    assert " after words" in prompt
    for placeholder in ("{BOOK}", "{CONTEXT_BEFORE}", "{SELECTION}", "{CONTEXT_AFTER}"):
        assert placeholder not in prompt


def test_question_prompt_uses_first_500_chars():
    page = _page("x" * 600 + "TAIL")
    prompt = build_question_prompt(page, "Why is Neptune angry?")
    assert "x" * 500 + "..." in prompt
    assert "TAIL" not in prompt
    assert "page 4 in Book 2" in prompt
    assert "Question: Why is Neptune angry?" in prompt


def test_definition_prompt_names_the_word():
    assert 'Define the word "hecatomb"' in build_definition_prompt("hecatomb")
