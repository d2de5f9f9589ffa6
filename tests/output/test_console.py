"""Tests for the Rich console factory."""

from postctl.output.console import POST_THEME, create_console, get_output


def test_console_renders_to_buffer() -> None:
    console = create_console(no_color=True)
    console.print("hello")
    assert get_output(console) == "hello\n"


def test_theme_styles_resolve() -> None:
    console = create_console()
    for name in POST_THEME.styles:
        console.get_style(name)


def test_width_override() -> None:
    assert create_console(width=60).width == 60
