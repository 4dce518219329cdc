import itertools
from typing import Callable, Dict, Iterator, List, NamedTuple, Optional, Tuple


class WordListError(Exception):
    """Base class for word list misuse."""


class StaleSlotError(WordListError, LookupError):
    """The slot belongs to a node that is no longer part of the list."""


class WordEntry:
    """
    A word and how many times it was seen. Starts at one occurrence and only
    ever grows through a sorted-insert merge.
    """

    __slots__ = ("text", "occurrences")

    def __init__(self, word: str):
        if not isinstance(word, str):
            raise TypeError(f"word must be str, not {type(word).__name__}")
        self.text: Optional[str] = word
        self.occurrences = 1

    @property
    def released(self) -> bool:
        return self.text is None

    def destroy(self):
        # second call is a no-op
        if self.text is not None:
            self.text = None

    def __repr__(self):
        return f"WordEntry({self.text!r}, occurrences={self.occurrences})"


class Slot(NamedTuple):
    """
    A link field in the chain: the list head when ``owner`` is None,
    otherwise the ``next`` field of node ``owner``.
    """

    owner: Optional[int] = None

    @property
    def is_head(self) -> bool:
        return self.owner is None


class InsertResult(NamedTuple):
    node_id: int
    index: int
    merged: bool


class WordList:
    """
    Singly linked word list. Nodes live in an id-addressed arena so that
    relinking a slot is just overwriting the id it stores, whether the slot
    is the head or some node's next field.
    """

    def __init__(self):
        self._id_iter = itertools.count()
        self.head: Optional[int] = None
        self.nodes: Dict[int, Dict] = {}
        # ids reachable from head; nodes from create_node stay out until linked
        self._linked = set()

    @property
    def length(self) -> int:
        return len(self._linked)

    # ---------- Slots ----------

    def head_slot(self) -> Slot:
        return Slot(None)

    def next_slot(self, node_id: int) -> Slot:
        self._require_node(node_id)
        return Slot(node_id)

    def slot_target(self, slot: Slot) -> Optional[int]:
        if slot.is_head:
            return self.head
        return self._require_node(slot.owner)["next"]

    def _set_slot(self, slot: Slot, node_id: Optional[int]):
        if slot.is_head:
            self.head = node_id
        else:
            self._require_node(slot.owner)["next"] = node_id

    def slot_at(self, index: int) -> Slot:
        """Slot holding the node at ``index``; ``len(self)`` gives the tail slot."""
        if index < 0 or index > self.length:
            raise IndexError("Index out of range")
        if index == 0:
            return self.head_slot()
        return Slot(self.node_id_at(index - 1))

    def _require_node(self, node_id: int) -> Dict:
        if node_id not in self._linked:
            raise StaleSlotError(f"node {node_id} is not in this list")
        return self.nodes[node_id]

    # ---------- Storage primitives ----------

    def create_node(self, word: str, next_id: Optional[int] = None) -> int:
        """
        Register a node pointing at ``next_id``. The node is not part of the
        chain until ``insert_word_unordered`` stores its id in a slot.
        """
        if next_id is not None and next_id not in self.nodes:
            raise StaleSlotError(f"node {next_id} is not in this list")
        entry = WordEntry(word)
        node_id = next(self._id_iter)
        self.nodes[node_id] = {"id": node_id, "entry": entry, "next": next_id}
        return node_id

    def delete_node(self, slot: Slot) -> Optional[Dict]:
        node_id = self.slot_target(slot)
        if node_id is None:
            return None

        node = self.nodes.pop(node_id)
        self._linked.discard(node_id)
        successor = node["next"]
        node["entry"].destroy()
        self._set_slot(slot, successor)
        return node

    def delete_list(self):
        while self.head is not None:
            self.delete_node(self.head_slot())
        # nodes made by create_node but never linked into a slot
        for node in self.nodes.values():
            node["entry"].destroy()
        self.nodes.clear()

    def insert_word_unordered(self, word: str, slot: Slot) -> int:
        node_id = self.create_node(word, self.slot_target(slot))
        self._set_slot(slot, node_id)
        self._linked.add(node_id)
        return node_id

    def insert_word_sorted(self, word: str) -> InsertResult:
        slot = self.head_slot()
        node_id = self.head
        index = 0
        while node_id is not None and self.nodes[node_id]["entry"].text <= word:
            entry = self.nodes[node_id]["entry"]
            if entry.text == word:
                entry.occurrences += 1
                return InsertResult(node_id, index, True)
            slot = Slot(node_id)
            node_id = self.nodes[node_id]["next"]
            index += 1

        return InsertResult(self.insert_word_unordered(word, slot), index, False)

    # ---------- Traversal ----------

    def _walk(self) -> Iterator[Dict]:
        current = self.head
        while current is not None:
            node = self.nodes[current]
            yield node
            current = node["next"]

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        for node in self._walk():
            yield node["entry"].text, node["entry"].occurrences

    def __len__(self):
        return self.length

    def for_each(self, visitor: Callable[[str, int], None]):
        for word, occurrences in self:
            visitor(word, occurrences)

    def words(self) -> List[str]:
        return [word for word, _ in self]

    def counts(self) -> List[Tuple[str, int]]:
        return list(self)

    def snapshot(self) -> List[Dict]:
        return [
            {
                "id": node["id"],
                "word": node["entry"].text,
                "occurrences": node["entry"].occurrences,
                "next": node["next"],
            }
            for node in self._walk()
        ]

    def entry(self, node_id: int) -> WordEntry:
        try:
            return self.nodes[node_id]["entry"]
        except KeyError:
            raise StaleSlotError(f"node {node_id} is not in this list") from None

    def index_of(self, node_id: int) -> int:
        for idx, node in enumerate(self._walk()):
            if node["id"] == node_id:
                return idx
        return -1

    def node_id_at(self, index: int) -> int:
        if index < 0 or index >= self.length:
            raise IndexError("Index out of range")
        current = self.head
        for _ in range(index):
            current = self.nodes[current]["next"]
        return current


def insert_word_sorted(word: str, word_list: Optional[WordList]) -> Optional[InsertResult]:
    """Sorted insert that tolerates an absent list."""
    if word_list is None:
        return None
    return word_list.insert_word_sorted(word)
