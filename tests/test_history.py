from minish.history import History


def test_add_and_index():
    h = History()
    h.add("ls")
    h.add("pwd")
    assert len(h) == 2
    assert h[0] == "ls"
    assert h[-1] == "pwd"


def test_empty_command_ignored():
    h = History()
    h.add("")
    assert len(h) == 0


def test_limit_drops_new_entries():
    h = History(limit=2)
    for cmd in ["a", "b", "c"]:
        h.add(cmd)
    assert [h[0], h[1]] == ["a", "b"]
    assert len(h) == 2


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "hist"
    h = History()
    for cmd in ["echo one", "cd /tmp", "pwd"]:
        h.add(cmd)
    h.save(path)
    loaded = History()
    loaded.load(path)
    assert [loaded[i] for i in range(len(loaded))] == ["echo one", "cd /tmp", "pwd"]


def test_save_writes_lines(tmp_path):
    path = tmp_path / "hist"
    h = History()
    h.add("first")
    h.add("second")
    h.save(path)
    assert path.read_text() == "first\nsecond\n"


def test_append_writes_only_new_entries(tmp_path):
    path = tmp_path / "hist"
    h = History()
    h.add("old")
    h.save(path)
    h.add("new")
    h.save(path, append=True)
    assert path.read_text() == "old\nnew\n"
    h.save(path, append=True)
    assert path.read_text() == "old\nnew\n"


def test_loaded_entries_are_not_appended_again(tmp_path):
    source = tmp_path / "src"
    source.write_text("a\nb\n")
    target = tmp_path / "dst"
    h = History()
    h.load(source)
    h.add("c")
    h.save(target, append=True)
    assert target.read_text() == "c\n"


def test_load_skips_blank_lines(tmp_path):
    path = tmp_path / "hist"
    path.write_text("a\n\nb\n")
    h = History()
    h.load(path)
    assert len(h) == 2
    assert h[1] == "b"


def test_load_missing_file_is_ignored(tmp_path):
    h = History()
    h.load(tmp_path / "missing")
    assert len(h) == 0


def test_tail():
    h = History()
    for cmd in ["a", "b", "c"]:
        h.add(cmd)
    assert h.tail() == [(1, "a"), (2, "b"), (3, "c")]
    assert h.tail(2) == [(2, "b"), (3, "c")]
    assert h.tail(10) == h.tail()
    assert h.tail(0) == []
    assert h.tail(-1) == []