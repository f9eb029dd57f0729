"""Tests for Rich Console factory and theme."""

from io import StringIO

from staffboard.output.console import (
    BOARD_THEME,
    create_console,
    get_output,
    style_for_kind,
)


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[bold red]홍길동[/bold red]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "홍길동" in output

    def test_default_width(self) -> None:
        assert create_console().width == 120

    def test_custom_width(self) -> None:
        assert create_console(width=200).width == 200


class TestGetOutput:
    def test_extracts_printed_text(self) -> None:
        console = create_console(no_color=True)
        console.print("C3 D5 이동")
        assert "C3 D5 이동" in get_output(console)

    def test_empty_console(self) -> None:
        assert get_output(create_console()) == ""


class TestTheme:
    def test_theme_has_board_styles(self) -> None:
        for name in ("sb.ok", "sb.error", "sb.coord", "sb.block.left", "sb.block.right"):
            assert name in BOARD_THEME.styles

    def test_style_for_kind(self) -> None:
        assert style_for_kind("employee") == "sb.kind.employee"
        assert style_for_kind("department") == "sb.kind.department"
        assert style_for_kind("unknown") == ""
