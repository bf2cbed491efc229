"""Unit tests for core/discover.py"""

from manupub.core import discover
from manupub.core.discover import discover_sources, read_source, split_frontmatter


def test_split_frontmatter_with_yaml():
    """split_frontmatter extracts YAML header and returns content."""
    fm, content = split_frontmatter("---\ntitle: Hello\n---\n# Body\n")
    assert fm == {"title": "Hello"}
    assert content == "# Body\n"


def test_split_frontmatter_no_frontmatter():
    """split_frontmatter returns empty dict and full text when no header."""
    text = "# No frontmatter\n"
    assert split_frontmatter(text) == ({}, text)


def test_split_frontmatter_invalid_yaml_keeps_text(caplog):
    """Invalid YAML is logged and the text is returned unchanged."""
    text = "---\nkey: [unclosed\n---\n# Body\n"
    fm, content = split_frontmatter(text)
    assert fm == {}
    assert content == text
    assert "invalid_frontmatter" in caplog.text


def test_split_frontmatter_non_mapping_keeps_text():
    """A YAML list header is not frontmatter."""
    text = "---\n- a\n- b\n---\n# Body\n"
    assert split_frontmatter(text) == ({}, text)


def test_read_source_id_is_relative_posix(tmp_path):
    """read_source ids are POSIX paths relative to the root."""
    sub = tmp_path / "01_intro"
    sub.mkdir()
    f = sub / "welcome.md"
    f.write_text("# Welcome\n", encoding="utf-8")
    source = read_source(f, tmp_path)
    assert source.id == "01_intro/welcome.md"
    assert source.text == "# Welcome\n"


def test_discover_sources_recursive(tmp_path):
    """discover_sources finds .md files at every depth, sorted by id."""
    (tmp_path / "b.md").write_text("# B")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "a.md").write_text("# A")
    (tmp_path / "notes.txt").write_text("text")
    ids = [s.id for s in discover_sources(tmp_path)]
    assert ids == ["b.md", "sub/a.md"]


def test_discover_sources_custom_pattern(tmp_path):
    """A non-recursive pattern only matches the top level."""
    (tmp_path / "top.md").write_text("# Top")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "nested.md").write_text("# Nested")
    assert [s.id for s in discover_sources(tmp_path, "*.md")] == ["top.md"]


def test_discover_sources_missing_dir(tmp_path):
    """A missing root is not an error: it yields no sources."""
    assert discover_sources(tmp_path / "nope") == []


def test_discover_sources_empty_dir(tmp_path):
    """A root without matches yields no sources."""
    assert discover_sources(tmp_path) == []


def test_discover_sources_skips_undecodable(tmp_path, caplog):
    """Files that are not valid UTF-8 are skipped with a warning."""
    (tmp_path / "good.md").write_text("# Good")
    (tmp_path / "bad.md").write_bytes(b"\xff\xfe\xfa bad")
    sources = discover_sources(tmp_path)
    assert [s.id for s in sources] == ["good.md"]
    assert "unreadable_source" in caplog.text


def test_read_source_drops_byte_order_mark(tmp_path):
    """A UTF-8 BOM is not part of the source text."""
    f = tmp_path / "bom.md"
    f.write_bytes("\ufeff# Intro\n\nBody.\n".encode("utf-8"))
    assert read_source(f, tmp_path).text == "# Intro\n\nBody.\n"


def test_split_frontmatter_after_byte_order_mark():
    """In-memory text with a BOM still has its header recognised."""
    fm, content = split_frontmatter("\ufeff---\ntitle: Hi\n---\n# Body\n")
    assert fm == {"title": "Hi"}
    assert content == "# Body\n"


def test_discover_sources_skips_unreadable(tmp_path, monkeypatch, caplog):
    """An OS error on one file skips that file and keeps the rest."""
    (tmp_path / "good.md").write_text("# Good")
    (tmp_path / "locked.md").write_text("# Locked")
    original = discover.read_source

    def _read(path, root):
        if path.name == "locked.md":
            raise PermissionError(13, "Permission denied", str(path))
        return original(path, root)

    monkeypatch.setattr(discover, "read_source", _read)
    sources = discover_sources(tmp_path)
    assert [s.id for s in sources] == ["good.md"]
    assert "unreadable_source" in caplog.text
    assert "locked.md" in caplog.text
