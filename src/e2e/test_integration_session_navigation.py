import base64
from pathlib import Path
import pytest
from pager.config import Settings
from pager.session import ReaderSession

TEXT = "The quick brown\nfox jumps over\n\n\nthe lazy dog"
PAGES = ["The quick", "brown fox", "jumps over", "the lazy", "dog"]


def _seed(tmp: Path, name: str = "book.txt", text: str = TEXT) -> str:
    f = tmp / name
    f.write_text(text, encoding="utf-8")
    return str(f)


def _settings(path: str, **kw) -> Settings:
    return Settings(file_path=path, page_size=10, store_dsn="memory://").replace(**kw)


@pytest.mark.e2e
def test_load_paginates_and_starts_hidden(tmp_path: Path):
    sess = ReaderSession(_settings(_seed(tmp_path)))
    try:
        sess.load()
        assert [p.content for p in sess.pages] == PAGES
        assert sess.current_page == 0
        st = sess.status()
        assert st.real is False and st.text == "" and st.total == 5
    finally:
        sess.close()


@pytest.mark.e2e
def test_paging_requires_real_content_and_clamps(tmp_path: Path):
    sess = ReaderSession(_settings(_seed(tmp_path)))
    try:
        sess.load()
        assert sess.next_page() is False
        assert sess.current_page == 0

        sess.show_real(True)
        assert sess.previous_page() is True
        assert sess.current_page == 0
        assert sess.next_page() is True
        assert sess.status().text == "brown fox"

        for _ in range(10):
            sess.next_page()
        assert sess.current_page == 4
        assert sess.jump(-3) == 0
        assert sess.jump(99) == 4
    finally:
        sess.close()


@pytest.mark.e2e
def test_search_and_jump(tmp_path: Path):
    sess = ReaderSession(_settings(_seed(tmp_path)))
    try:
        sess.load()
        hit = sess.search_and_jump("  LAZY ")
        assert hit is not None and hit.page == 3
        assert sess.current_page == 3 and sess.real is True
        assert sess.search_and_jump("absent") is None
        assert sess.search("   ") == []
    finally:
        sess.close()


@pytest.mark.e2e
def test_page_is_restored_from_sqlite_state(tmp_path: Path):
    book = _seed(tmp_path)
    dsn = f"sqlite:///{tmp_path / 'state.sqlite'}"

    s1 = ReaderSession(_settings(book, store_dsn=dsn))
    s1.load()
    s1.jump(2)
    s1.close()

    s2 = ReaderSession(_settings(book, store_dsn=dsn))
    try:
        s2.load()
        assert s2.current_page == 2
    finally:
        s2.close()


@pytest.mark.e2e
def test_cache_disabled_always_starts_at_first_page(tmp_path: Path):
    book = _seed(tmp_path)
    dsn = f"sqlite:///{tmp_path / 'state.sqlite'}"

    s1 = ReaderSession(_settings(book, store_dsn=dsn))
    s1.load(); s1.jump(3); s1.close()

    s2 = ReaderSession(_settings(book, store_dsn=dsn, enable_cache=False))
    try:
        s2.load()
        assert s2.current_page == 0
    finally:
        s2.close()


@pytest.mark.e2e
def test_switch_file_cycles(tmp_path: Path):
    a = _seed(tmp_path, "a.txt", "first file")
    b = _seed(tmp_path, "b.txt", "second")
    sess = ReaderSession(_settings(a, files=[b]))
    try:
        sess.load()
        assert sess.current_file == a
        assert sess.switch_file() is True
        assert sess.current_file == b
        assert sess.page_content() == "second"
        assert sess.switch_file() is True
        assert sess.current_file == a
    finally:
        sess.close()


@pytest.mark.e2e
def test_switch_file_with_one_file(tmp_path: Path):
    sess = ReaderSession(_settings(_seed(tmp_path)))
    try:
        sess.load()
        assert sess.switch_file() is False
    finally:
        sess.close()


@pytest.mark.e2e
def test_reload_picks_up_changes_and_clamps_page(tmp_path: Path):
    book = _seed(tmp_path)
    sess = ReaderSession(_settings(book))
    try:
        sess.load()
        sess.jump(4)
        Path(book).write_text("tiny", encoding="utf-8")
        sess.reload()
        assert [p.content for p in sess.pages] == ["tiny"]
        assert sess.current_page == 0
    finally:
        sess.close()


@pytest.mark.e2e
def test_encrypted_file_is_decoded(tmp_path: Path):
    f = tmp_path / "secret.txt"
    f.write_text(base64.b64encode(TEXT.encode("utf-8")).decode("ascii"), encoding="utf-8")
    sess = ReaderSession(_settings(str(f), enable_encryption=True))
    try:
        sess.load()
        assert [p.content for p in sess.pages] == PAGES
    finally:
        sess.close()


@pytest.mark.e2e
def test_page_info_in_status(tmp_path: Path):
    sess = ReaderSession(_settings(_seed(tmp_path), show_page_info=True))
    try:
        sess.load()
        sess.jump(1)
        assert sess.status().text == "brown fox [2/5]"
    finally:
        sess.close()


@pytest.mark.e2e
def test_errors_before_and_without_files(tmp_path: Path):
    sess = ReaderSession(Settings(file_path=None, files=[]))
    with pytest.raises(RuntimeError):
        sess.status()
    with pytest.raises(RuntimeError):
        sess.load()

    missing = ReaderSession(_settings(str(tmp_path / "missing.txt")))
    with pytest.raises(FileNotFoundError):
        missing.load()


@pytest.mark.e2e
def test_failed_switch_keeps_the_open_file(tmp_path: Path):
    a = _seed(tmp_path, "a.txt")
    b = str(tmp_path / "b.txt")
    sess = ReaderSession(_settings(a, files=[b]))
    try:
        sess.load()
        sess.jump(2)
        with pytest.raises(FileNotFoundError):
            sess.switch_file()

        assert sess.file_index == 0
        assert sess.current_file == a
        assert sess.current_page == 2
        assert sess.page_content() == "jumps over"
        assert sess.status().text == "jumps over"

        sess.jump(3)
        assert sess._store.read(b) is None
        assert sess._store.read(a).current_page == 3
    finally:
        sess.close()
