"""
Tests for the workspace manifest parser — pnpm-workspace.yaml skimming.
"""

import textwrap

from opennext_cli.core.services.workspace_parser import parse_workspace_manifest


class TestBlockList:
    def test_dash_entries(self):
        text = textwrap.dedent("""\
            packages:
              - 'apps/*'
              - "packages/*"
              - tools/cli
        """)
        assert parse_workspace_manifest(text) == ["apps/*", "packages/*", "tools/cli"]

    def test_blank_and_comment_lines_inside_list(self):
        text = textwrap.dedent("""\
            packages:
              # applications
              - 'apps/*'

              - 'packages/*'  # shared code
        """)
        assert parse_workspace_manifest(text) == ["apps/*", "packages/*"]

    def test_list_ends_at_next_key(self):
        text = textwrap.dedent("""\
            packages:
              - 'apps/*'
            catalog:
              - 'not-a-workspace'
        """)
        assert parse_workspace_manifest(text) == ["apps/*"]

    def test_key_after_other_content(self):
        text = "onlyBuiltDependencies:\n  - esbuild\npackages:\n  - apps/web\n"
        assert parse_workspace_manifest(text) == ["apps/web"]

    def test_duplicates_preserved(self):
        text = "packages:\n  - apps/*\n  - apps/*\n"
        assert parse_workspace_manifest(text) == ["apps/*", "apps/*"]


class TestInlineList:
    def test_inline_brackets(self):
        assert parse_workspace_manifest("packages: ['apps/*', \"libs/*\"]\n") == [
            "apps/*",
            "libs/*",
        ]

    def test_inline_ignores_following_lines(self):
        text = "packages: [apps/*]\n  - 'ignored/*'\n"
        assert parse_workspace_manifest(text) == ["apps/*"]

    def test_inline_empty(self):
        assert parse_workspace_manifest("packages: []\n") == []

    def test_flow_list_over_several_lines(self):
        text = textwrap.dedent("""\
            packages: [
              'apps/*',  # web apps
              "libs/*",
            ]
        """)
        assert parse_workspace_manifest(text) == ["apps/*", "libs/*"]

    def test_flow_list_closing_on_last_item(self):
        text = "packages: [\n  apps/web,\n  apps/docs]\nother: 1\n"
        assert parse_workspace_manifest(text) == ["apps/web", "apps/docs"]


class TestMalformed:
    def test_no_packages_key(self):
        assert parse_workspace_manifest("this is: not [valid yaml\n") == []

    def test_empty_text(self):
        assert parse_workspace_manifest("") == []

    def test_unclosed_bracket(self):
        assert parse_workspace_manifest("packages: ['apps/*'\n") == []

    def test_scalar_value(self):
        assert parse_workspace_manifest("packages: apps\n") == []
