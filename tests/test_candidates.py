import io

from menu_engine.candidates import Candidate, CandidateStore


def test_from_lines_strips_line_endings_and_decodes_bytes() -> None:
    store = CandidateStore.from_lines([b"alpha\n", "beta\r\n", b"\xffgamma", ""])

    assert store.texts() == ["alpha", "beta", "�gamma", ""]


def test_from_stream_reads_every_line_in_order() -> None:
    store = CandidateStore.from_stream(io.BytesIO(b"one\ntwo\nthree"))

    assert len(store) == 3
    assert [candidate.text for candidate in store] == ["one", "two", "three"]


def test_empty_store() -> None:
    store = CandidateStore.from_lines([])

    assert len(store) == 0
    assert store.widest(len) is None


def test_widest_prefers_first_on_ties() -> None:
    store = CandidateStore([Candidate("ab"), Candidate("cd"), Candidate("e")])

    widest = store.widest(len)

    assert widest is store[0]


def test_marked_lists_marked_candidates() -> None:
    store = CandidateStore.from_lines(["a", "b", "c"])
    store[1].marked = True

    assert [candidate.text for candidate in store.marked()] == ["b"]
