from wordlist.wl_model import WordList
from wordlist.wl_render import (
    DEMO_WORDS,
    EMPTY_LINE,
    format_word_list,
    node_identity,
    render_word_list,
    run_demo,
)


def test_empty_list_renders_single_line():
    assert render_word_list(WordList()) == [EMPTY_LINE]
    assert render_word_list(None) == [EMPTY_LINE]


def test_node_lines_show_identity_and_successor():
    word_list = WordList()
    word_list.insert_word_sorted("beta")
    word_list.insert_word_sorted("alpha")
    word_list.insert_word_sorted("beta")

    assert render_word_list(word_list) == [
        "Printing the list:",
        "Node [1], addr [node@0001], data [alpha], occurrences [1], next [node@0000]",
        "Node [2], addr [node@0000], data [beta], occurrences [2], next [nil]",
        "Done.",
    ]


def test_format_joins_lines():
    word_list = WordList()
    word_list.insert_word_sorted("x")
    assert format_word_list(word_list).splitlines() == render_word_list(word_list)


def test_node_identity_sentinel():
    assert node_identity(None) == "nil"
    assert node_identity(12) == "node@0012"


def _section(lines, heading):
    start = lines.index(heading) + 1
    end = start
    while end < len(lines) and lines[end] != "":
        end += 1
    return lines[start:end]


def _words_of(section):
    return [line.split("data [")[1].split("]")[0] for line in section if line.startswith("Node [")]


def test_demo_walkthrough():
    printed = []
    lines = run_demo(emit=printed.append)
    assert lines == printed

    unordered = _section(lines, "Test one - inserting the words.")
    assert _words_of(unordered) == list(reversed(DEMO_WORDS))

    after_delete = _words_of(_section(lines, "Test two - deleting the third word."))
    expected = list(reversed(DEMO_WORDS))
    del expected[2]
    assert after_delete == expected

    assert _section(lines, "Test three - deleting the word list.") == [EMPTY_LINE]

    sorted_section = _section(lines, "Test four - adding sorted words.")
    assert _words_of(sorted_section) == ["aaa", "bbb", "ccc", "ddd", "eee"]
    assert "occurrences [4]" in sorted_section[2]

    assert lines[-1] == EMPTY_LINE
