"""Tests for sessionizer.core.commands — tool selection and argv shapes."""

from __future__ import annotations

from sessionizer.core.commands import (
    build_indexer_command,
    build_lister_command,
    build_walker_command,
    probe_indexer,
    quote_powershell,
    select_tool,
)
from sessionizer.core.paths import exclude_flags
from sessionizer.model import ScanTool


# ── select_tool ─────────────────────────────────────────────────────


class TestSelectTool:
    def test_windows_always_native(self) -> None:
        assert select_tool(True, True) is ScanTool.NATIVE_LISTER
        assert select_tool(True, False) is ScanTool.NATIVE_LISTER

    def test_indexer_when_present(self) -> None:
        assert select_tool(False, True) is ScanTool.INDEXER

    def test_fallback_when_absent(self) -> None:
        assert select_tool(False, False) is ScanTool.FALLBACK_WALKER


class TestProbeIndexer:
    def test_prefers_fd(self) -> None:
        assert probe_indexer(lambda name: f"/usr/bin/{name}") == "fd"

    def test_debian_name(self) -> None:
        found = {"fdfind": "/usr/bin/fdfind"}
        assert probe_indexer(found.get) == "fdfind"

    def test_absent(self) -> None:
        assert probe_indexer(lambda name: None) is None


# ── indexer ─────────────────────────────────────────────────────────


class TestIndexerCommand:
    def test_exact_argv(self) -> None:
        cmd = build_indexer_command(
            "/base", 2, 3, exclude_flags([".git", "node_modules"])
        )
        assert cmd == [
            "fd", "--min-depth", "1", "--max-depth", "2", "-t", "d", ".", "/base",
            "--exclude", ".git", "--exclude", "node_modules",
        ]

    def test_match_all_pattern_precedes_base_path(self) -> None:
        cmd = build_indexer_command("/home/u/code", None, 3, [])
        i = cmd.index("/home/u/code")
        assert cmd[i - 1] == "."

    def test_exclusions_follow_base_path(self) -> None:
        cmd = build_indexer_command("/base", None, 3, exclude_flags([".git"]))
        assert cmd.index("--exclude") > cmd.index("/base")

    def test_unlimited_depth_has_no_max_depth(self) -> None:
        cmd = build_indexer_command("/base", -1, 3, [])
        assert "--max-depth" not in cmd

    def test_none_depth_uses_default(self) -> None:
        cmd = build_indexer_command("/base", None, 4, [])
        i = cmd.index("--max-depth")
        assert cmd[i + 1] == "4"

    def test_program_override(self) -> None:
        assert build_indexer_command("/b", 1, 3, [], program="fdfind")[0] == "fdfind"


# ── fallback walker ─────────────────────────────────────────────────


class TestWalkerCommand:
    def test_exact_argv_without_exclusions(self) -> None:
        assert build_walker_command("/base", 3, 3, []) == [
            "find", "/base", "-mindepth", "1", "-maxdepth", "3", "-type", "d", "-print",
        ]

    def test_prune_clauses_precede_print(self) -> None:
        cmd = build_walker_command("/base", None, 3, [".git", "node_modules"])
        tail = cmd[-3:]
        assert tail == ["-type", "d", "-print"]

        prune_positions = [i for i, a in enumerate(cmd) if a == "-prune"]
        assert len(prune_positions) == 4
        for i in prune_positions:
            # each clause closes and is immediately followed by -o
            assert cmd[i + 1] == ")"
            assert cmd[i + 2] == "-o"
        assert max(prune_positions) < cmd.index("-type")

    def test_every_excluded_name_pruned(self) -> None:
        cmd = build_walker_command("/base", None, 3, [".git", "node_modules"])
        paths = [cmd[i + 1] for i, a in enumerate(cmd) if a == "-path"]
        assert "/base/.git" in paths
        assert "/base/node_modules" in paths
        assert paths.index("/base/.git") < paths.index("/base/node_modules")

    def test_unlimited_depth_has_no_maxdepth(self) -> None:
        cmd = build_walker_command("/base", -1, 3, [".git"])
        assert "-maxdepth" not in cmd
        assert cmd[:4] == ["find", "/base", "-mindepth", "1"]


# ── native lister ───────────────────────────────────────────────────


class TestListerCommand:
    def test_shape(self) -> None:
        cmd = build_lister_command("C:\\code", exclude_flags([".git"], native=True))
        assert cmd == [
            "powershell", "-NoProfile", "-Command",
            "Get-ChildItem -LiteralPath 'C:\\code' -Directory -Exclude '.git'"
            " | ForEach-Object FullName",
        ]

    def test_path_with_space_stays_one_token(self) -> None:
        cmd = build_lister_command("C:\\Users\\Jane Doe\\code", [])
        assert len(cmd) == 4
        assert "-LiteralPath 'C:\\Users\\Jane Doe\\code' -Directory" in cmd[-1]

    def test_single_quotes_doubled(self) -> None:
        cmd = build_lister_command("C:\\o'brien", exclude_flags(["it's"], native=True))
        assert "'C:\\o''brien'" in cmd[-1]
        assert "-Exclude 'it''s'" in cmd[-1]


class TestQuotePowershell:
    def test_plain(self) -> None:
        assert quote_powershell("abc") == "'abc'"

    def test_embedded_quote(self) -> None:
        assert quote_powershell("a'b") == "'a''b'"


class TestDeterminism:
    def test_same_inputs_same_argv(self) -> None:
        a = build_walker_command("/base", 2, 3, ["x", "y"])
        b = build_walker_command("/base", 2, 3, ["x", "y"])
        assert a == b
        c = build_indexer_command("/base", 2, 3, exclude_flags(["x"]))
        d = build_indexer_command("/base", 2, 3, exclude_flags(["x"]))
        assert c == d
