"""
Deterministic Finite Automaton (DFA) representation for L* hypotheses.

A hypothesis is a labeled transition graph: every state is identified by a
word (the canonical access prefix from the observation table), carries an
accepting flag, and owns its outgoing symbol-labeled transitions.
"""

from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence, Set, Tuple
from collections import deque


Word = Tuple[Hashable, ...]


class DfaState:
    """A single DFA state with its outgoing transitions."""

    def __init__(self, state_id: Sequence[Hashable], is_accepting: bool = False):
        self.state_id: Word = tuple(state_id)
        self.is_accepting = is_accepting
        self.transitions: Dict[Hashable, Word] = {}

    def serialize_state_id(self, sep: str = "") -> str:
        """Join the symbols of the state id with ``sep``."""
        return sep.join(str(symbol) for symbol in self.state_id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DfaState):
            return NotImplemented
        return (self.state_id == other.state_id
                and self.is_accepting == other.is_accepting
                and self.transitions == other.transitions)

    def __hash__(self) -> int:
        return hash(self.state_id)

    def __repr__(self) -> str:
        return f"DfaState({self.state_id!r}, accepting={self.is_accepting})"


class Automaton:
    """Deterministic automaton built by L* and checked by the teacher."""

    def __init__(self, initial_state: DfaState):
        """
        Initialize automaton.

        Args:
            initial_state: Starting state, registered on construction
        """
        self._states: Dict[Word, DfaState] = {}
        self.add_state(initial_state)
        self._initial_state = initial_state.state_id

    @property
    def states(self) -> Dict[Word, DfaState]:
        """Mapping from state id to state."""
        return self._states

    @property
    def alphabet(self) -> List[Hashable]:
        """Symbols labelling at least one transition, in first-seen order."""
        symbols = {}
        for state in self._states.values():
            for label in state.transitions:
                symbols.setdefault(label, None)
        return list(symbols)

    @property
    def accepting_states(self) -> Set[Word]:
        return {state_id for state_id, state in self._states.items()
                if state.is_accepting}

    def add_state(self, state: DfaState):
        """Register ``state`` unless a state with the same id already exists."""
        if state.state_id not in self._states:
            self._states[state.state_id] = state

    def get_state(self, state_id: Sequence[Hashable]) -> Optional[DfaState]:
        return self._states.get(tuple(state_id))

    def add_transition(self, source: DfaState, target: DfaState, label: Hashable):
        """
        Add ``source --label--> target``.

        Missing endpoints are registered first. An existing transition for
        ``(source, label)`` is replaced.
        """
        self.add_state(source)
        self.add_state(target)
        self._states[source.state_id].transitions[label] = target.state_id

    def get_initial_state(self) -> DfaState:
        """
        Get the initial state.

        Raises:
            KeyError: If the initial state id is not registered
        """
        return self._states[self._initial_state]

    def set_initial_state(self, state: DfaState):
        self.add_state(state)
        self._initial_state = state.state_id

    def get_state_after(self, word: Iterable[Hashable]) -> Optional[Word]:
        """
        Get state reached after processing word.

        Returns:
            State id, or None if some transition is undefined
        """
        current = self._initial_state
        for symbol in word:
            current = self._states[current].transitions.get(symbol)
            if current is None:
                return None
        return current

    def accepts(self, word: Iterable[Hashable]) -> bool:
        """
        Determine if the automaton accepts ``word``.

        Undefined transitions reject.

        Time Complexity: O(|word|)
        """
        state_id = self.get_state_after(word)
        return state_id is not None and self._states[state_id].is_accepting

    def reachable_states(self) -> List[Word]:
        """State ids reachable from the initial state, in BFS order."""
        seen = {self._initial_state}
        order = [self._initial_state]
        queue = deque([self._initial_state])
        while queue:
            current = queue.popleft()
            for target in self._states[current].transitions.values():
                if target not in seen:
                    seen.add(target)
                    order.append(target)
                    queue.append(target)
        return order

    def minimal_diverging_suffix(self, state1: Sequence[Hashable],
                                 state2: Sequence[Hashable],
                                 alphabet: Optional[Sequence[Hashable]] = None) -> Optional[Word]:
        """
        Find shortest suffix distinguishing two states.

        Uses BFS over pairs of states to find the minimal witness for
        state inequivalence.

        Args:
            state1: First state id
            state2: Second state id
            alphabet: Symbols to explore (defaults to ``self.alphabet``)

        Returns:
            Shortest suffix on which exactly one state accepts, or None if
            the states are equivalent

        Time Complexity: O(|Q|^2 × |Σ|) worst case
        """
        symbols = self.alphabet if alphabet is None else list(alphabet)
        state1, state2 = tuple(state1), tuple(state2)
        accepting = self.accepting_states

        if (state1 in accepting) != (state2 in accepting):
            return ()

        queue = deque([((), state1, state2)])
        visited = {(state1, state2)}

        while queue:
            suffix, s1, s2 = queue.popleft()
            for symbol in symbols:
                next_s1 = self._states[s1].transitions.get(symbol)
                next_s2 = self._states[s2].transitions.get(symbol)
                if next_s1 is None or next_s2 is None:
                    continue

                new_suffix = suffix + (symbol,)
                if (next_s1 in accepting) != (next_s2 in accepting):
                    return new_suffix

                if (next_s1, next_s2) not in visited:
                    visited.add((next_s1, next_s2))
                    queue.append((new_suffix, next_s1, next_s2))

        return None

    def __len__(self) -> int:
        """Return number of states."""
        return len(self._states)

    def __str__(self) -> str:
        initial = self.get_initial_state().serialize_state_id()
        return (f"Automaton(|Q|={len(self._states)}, |Σ|={len(self.alphabet)}, "
                f"q0='{initial}', |F|={len(self.accepting_states)})")

    def to_dot(self, sep: str = "") -> str:
        """
        Generate Graphviz DOT representation.

        Args:
            sep: Separator used to join the symbols of a state id

        Returns:
            DOT format string for visualization
        """
        lines = ["digraph DFA {", "    rankdir=LR;", "    node [shape=circle];"]

        for state in self._states.values():
            name = _quote(state.serialize_state_id(sep))
            if state.is_accepting:
                lines.append(f"    {name} [shape=doublecircle];")
            else:
                lines.append(f"    {name};")

        initial = self.get_initial_state()
        lines.append('    __start__ [shape=point, label=""];')
        lines.append(f"    __start__ -> {_quote(initial.serialize_state_id(sep))};")

        for state in self._states.values():
            source = _quote(state.serialize_state_id(sep))
            for label, target_id in state.transitions.items():
                target = _quote(self._states[target_id].serialize_state_id(sep))
                lines.append(f"    {source} -> {target} [label={_quote(str(label))}];")

        lines.append("}")
        return "\n".join(lines) + "\n"


def _quote(text: Any) -> str:
    escaped = str(text).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
