import pytest

from clipcat.finder import FinderError, FinderStream, FinderType
from clipcat.types import ClipboardData


class Limited(FinderStream):
    line_length = 5


def test_generate_input():
    d = FinderStream()
    assert d.generate_input([]) == ""

    clips = [ClipboardData.new_clipboard("abcde")]
    assert d.generate_input(clips) == "0: abcde"

    clips = [
        ClipboardData.new_clipboard("abcde"),
        ClipboardData.new_clipboard("АбВГД"),
        ClipboardData.new_clipboard("あいうえお"),
    ]
    assert d.generate_input(clips) == "0: abcde\n1: АбВГД\n2: あいうえお"


def test_generate_input_escapes_newlines():
    d = FinderStream()
    clips = [ClipboardData.new_primary("a\nb")]
    assert d.generate_input(clips) == "0: a\\nb"


def test_generate_input_uses_line_length():
    d = Limited()
    clips = [ClipboardData.new_primary("abcdefgh")]
    assert d.generate_input(clips) == "0: ab..."


@pytest.mark.parametrize(
    "output, expected",
    [
        ("", []),
        (":", []),
        ("::::::::", []),
        ("\n\n\n\n\n", []),
        ("9\n3\n0\n4\n1\n", [9, 3, 0, 4, 1]),
        ("203: abcde|АбВГД3|200あいうえお385", [203]),
        ("2:3:4:5", [2]),
        ("10: abcde\n2: АбВГД3020\n9:333\n7:30あいうえお38405\n1:323", [10, 2, 9, 7, 1]),
    ],
)
def test_parse_output(output, expected):
    d = FinderStream()
    assert d.parse_output(output.encode("utf-8")) == expected
    assert d.parse_output(output) == expected


def test_parse_output_rejects_non_digits():
    d = FinderStream()
    assert d.parse_output(b"-1: x\n 2: y\nab: z\n3: w") == [3]


def test_round_trip_indices():
    d = FinderStream()
    clips = [ClipboardData.new_primary(str(i)) for i in range(5)]
    assert d.parse_output(d.generate_input(clips).encode("utf-8")) == [0, 1, 2, 3, 4]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("builtin", FinderType.BUILTIN),
        ("rofi", FinderType.ROFI),
        ("DMENU", FinderType.DMENU),
        ("Skim", FinderType.SKIM),
        ("fzf", FinderType.FZF),
        ("custom", FinderType.CUSTOM),
    ],
)
def test_finder_type_parse(name, expected):
    assert FinderType.parse(name) is expected


def test_finder_type_parse_invalid():
    with pytest.raises(FinderError, match="Invalid finder: nope"):
        FinderType.parse("nope")


def test_finder_type_str_round_trip():
    for finder in FinderType.available_types():
        assert FinderType.parse(str(finder)) is finder


def test_available_types_order():
    assert [str(t) for t in FinderType.available_types()] == [
        "builtin",
        "rofi",
        "dmenu",
        "skim",
        "fzf",
        "custom",
    ]