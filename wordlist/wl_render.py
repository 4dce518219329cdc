from typing import Callable, List, Optional

from wordlist.wl_model import WordList

EMPTY_LINE = "The list is empty."
NIL = "nil"

DEMO_WORDS = ["bbb", "ddd", "aaa", "bbb", "ccc", "eee", "bbb", "aaa", "bbb"]


def node_identity(node_id: Optional[int]) -> str:
    if node_id is None:
        return NIL
    return f"node@{node_id:04d}"


def render_word_list(word_list: Optional[WordList]) -> List[str]:
    """
    Debug listing of the chain: ordinal, node identity, word, count and the
    identity of the successor. An empty (or absent) list is one line.
    """
    if word_list is None or word_list.head is None:
        return [EMPTY_LINE]

    lines = ["Printing the list:"]
    for count, node in enumerate(word_list.snapshot(), start=1):
        lines.append(
            f"Node [{count}], addr [{node_identity(node['id'])}], "
            f"data [{node['word']}], occurrences [{node['occurrences']}], "
            f"next [{node_identity(node['next'])}]"
        )
    lines.append("Done.")
    return lines


def format_word_list(word_list: Optional[WordList]) -> str:
    return "\n".join(render_word_list(word_list))


def run_demo(emit: Callable[[str], None] = print, words=None) -> List[str]:
    """Walk a list through unordered inserts, deletes and sorted inserts."""
    words = list(DEMO_WORDS if words is None else words)
    emitted = []

    def _out(line):
        emitted.append(line)
        emit(line)

    def _show(word_list):
        for line in render_word_list(word_list):
            _out(line)

    word_list = WordList()

    _out("Test one - inserting the words.")
    for word in words:
        word_list.insert_word_unordered(word, word_list.head_slot())
    _show(word_list)

    _out("")
    _out("Test two - deleting the third word.")
    if len(word_list) > 2:
        word_list.delete_node(word_list.slot_at(2))
    _show(word_list)

    _out("")
    _out("Test three - deleting the word list.")
    word_list.delete_list()
    _show(word_list)

    word_list = WordList()

    _out("")
    _out("Test four - adding sorted words.")
    for word in words:
        word_list.insert_word_sorted(word)
    _show(word_list)

    _out("")
    _out("Test five - deleting the word list for final cleanup.")
    word_list.delete_list()
    _show(word_list)

    return emitted
