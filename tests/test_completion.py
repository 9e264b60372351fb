from minish.completion import find_completions, longest_common_prefix


def test_builtins_without_path(monkeypatch):
    monkeypatch.delenv("PATH", raising=False)
    assert find_completions("e") == ["echo", "exit"]
    assert find_completions("hist") == ["history"]


def test_no_matches(tmp_path, monkeypatch):
    monkeypatch.setenv("PATH", str(tmp_path))
    assert find_completions("zzq") == []


def test_path_entries_are_included_and_sorted(tmp_path, monkeypatch):
    (tmp_path / "ex_tool").write_text("")
    (tmp_path / "eb_tool").write_text("")
    (tmp_path / "other").write_text("")
    monkeypatch.setenv("PATH", str(tmp_path))
    result = find_completions("e")
    assert result == sorted(result)
    assert set(result) == {"echo", "exit", "ex_tool", "eb_tool"}


def test_duplicates_across_directories(tmp_path, monkeypatch):
    first = tmp_path / "a"
    second = tmp_path / "b"
    first.mkdir()
    second.mkdir()
    (first / "tool").write_text("")
    (second / "tool").write_text("")
    (second / "echo").write_text("")
    monkeypatch.setenv("PATH", f"{first}:{second}:{tmp_path / 'missing'}")
    assert find_completions("tool") == ["tool"]
    assert find_completions("echo") == ["echo"]


def test_longest_common_prefix():
    assert longest_common_prefix(["echo", "exit"]) == "e"
    assert longest_common_prefix(["abc", "abd"]) == "ab"
    assert longest_common_prefix(["history", "history"]) == "history"
    assert longest_common_prefix([]) == ""


def test_longest_common_prefix_is_prefix_of_all():
    words = ["cargo", "car", "carbon"]
    lcp = longest_common_prefix(words)
    assert all(word.startswith(lcp) for word in words)
    assert lcp == "car"