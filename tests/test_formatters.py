"""Tests for status annotations and tree rendering"""
import os
import re

import pytest

from gitree.constants import StyleCategory
from gitree.formatters import (
    RenderOptions,
    format_repository_annotation,
    format_status,
    format_tree,
    get_branch_style_type,
    render_tree,
)
from gitree.models import Repository, Status
from gitree.services.tree_builder import build_tree

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")
ROOT = os.path.abspath(os.sep + "workspace")


def _repo(relative, status=None, **kwargs):
    repo = Repository(path=os.path.join(ROOT, *relative.split("/")), **kwargs)
    if status is not None:
        repo.attach_status(status)
    return repo


class TestFormatStatus:
    """Test the bracketed status annotation."""

    @pytest.mark.parametrize(
        "status, expected",
        [
            (Status(branch="main", has_remote=True), "[[ main ]]"),
            (Status(branch="main", has_remote=True, ahead=2, behind=1), "[[ main | ↑2 ↓1 ]]"),
            (Status(branch="main", has_remote=True, behind=3), "[[ main | ↓3 ]]"),
            (Status(branch="develop", has_stashes=True, has_changes=True), "[[ develop | ○ $ * ]]"),
            (Status(branch="main"), "[[ main | ○ ]]"),
            (Status(branch="DETACHED", is_detached=True, has_remote=True), "[[ DETACHED ]]"),
            (Status(branch="feature/x", has_remote=True, has_changes=True), "[[ feature/x | * ]]"),
        ],
    )
    def test_plain_output(self, status, expected):
        assert format_status(status).plain == expected

    def test_branch_style_types(self):
        assert get_branch_style_type("main") == StyleCategory.BRANCH_DEFAULT
        assert get_branch_style_type("master") == StyleCategory.BRANCH_DEFAULT
        assert get_branch_style_type("develop") == StyleCategory.BRANCH_OTHER

    def test_no_styles_without_color(self):
        text = format_status(Status(branch="develop", has_remote=True, ahead=1))
        assert text.spans == []

    def test_styles_with_color(self):
        options = RenderOptions(color=True)
        text = format_status(Status(branch="develop", has_remote=True, ahead=1), options)
        styles = {str(span.style) for span in text.spans}
        assert "bold yellow" in styles
        assert "bold green" in styles


class TestRenderOptions:
    """Test style lookup."""

    def test_style_none_when_color_off(self):
        assert RenderOptions(color=False).style(StyleCategory.AHEAD) is None

    def test_style_lookup_when_color_on(self):
        assert RenderOptions(color=True).style(StyleCategory.BEHIND) == "bold red"

    def test_custom_styles_do_not_leak(self):
        options = RenderOptions(color=True)
        options.styles[StyleCategory.AHEAD] = "blue"
        assert RenderOptions(color=True).style(StyleCategory.AHEAD) == "bold green"


class TestRepositoryAnnotation:
    """Test markers appended after a repository name."""

    def test_timeout_marker(self):
        repo = _repo("slow", Status.timed_out())
        assert format_repository_annotation(repo).plain == " [[ unknown | ○ ]] timeout"

    def test_error_marker(self):
        repo = _repo("broken", Status(branch="main", error="failed to get worktree status: boom"))
        assert format_repository_annotation(repo).plain == " [[ main | ○ ]] error"

    def test_error_without_status(self):
        repo = _repo("lost")
        repo.mark_failed("status not collected")
        assert format_repository_annotation(repo).plain == " error"

    def test_bare_marker(self):
        repo = _repo("server.git", Status(branch="main"), is_bare=True)
        assert format_repository_annotation(repo).plain == " [[ main | ○ ]] bare"

    def test_nothing_to_show(self):
        assert format_repository_annotation(_repo("pending")).plain == ""


class TestRenderTree:
    """Test line-drawing output."""

    def _sample_tree(self):
        repos = [
            _repo("api", Status(branch="main", has_remote=True, ahead=2)),
            _repo("libs/core", Status(branch="feature/x", has_changes=True)),
            _repo("libs/util", Status(branch="main", has_remote=True)),
            _repo("web", Status(branch="develop", has_remote=True, behind=1)),
        ]
        return build_tree(ROOT, repos)

    def test_exact_output(self):
        expected = (
            ".\n"
            "├── api [[ main | ↑2 ]]\n"
            "├── libs\n"
            "│   ├── core [[ feature/x | ○ * ]]\n"
            "│   └── util [[ main ]]\n"
            "└── web [[ develop | ↓1 ]]\n"
        )
        assert format_tree(self._sample_tree()) == expected

    def test_blank_prefix_below_last_child(self):
        repos = [
            _repo("a"),
            _repo("z/deep/repo", Status(branch="main", has_remote=True)),
        ]
        output = format_tree(build_tree(ROOT, repos))
        assert output.splitlines() == [
            ".",
            "├── a",
            "└── z",
            "    └── deep",
            "        └── repo [[ main ]]",
        ]

    def test_empty_tree(self):
        assert format_tree(build_tree(ROOT, [])) == "no repositories found\n"

    def test_hide_root(self):
        output = format_tree(self._sample_tree(), RenderOptions(show_root=False))
        assert output.splitlines()[0] == "├── api [[ main | ↑2 ]]"

    def test_root_repository_annotated(self):
        root_repo = Repository(path=ROOT)
        root_repo.attach_status(Status(branch="main", has_remote=True))
        output = format_tree(build_tree(ROOT, [root_repo]))
        assert output == ". [[ main ]]\n"

    def test_color_output_matches_plain_characters(self):
        tree = self._sample_tree()
        plain = format_tree(tree, RenderOptions(color=False))
        colored = format_tree(tree, RenderOptions(color=True))

        assert "\x1b[" in colored
        assert ANSI_ESCAPE.sub("", colored) == plain

    def test_render_is_repeatable(self):
        tree = self._sample_tree()
        assert render_tree(tree).plain == render_tree(tree).plain
