"""State of the key/value JSON editor."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional


class CurrentScreen(Enum):
    MAIN = auto()
    EDITING = auto()
    EXITING = auto()


class CurrentlyEditing(Enum):
    KEY = auto()
    VALUE = auto()


@dataclass
class JsonApp:
    """The pairs entered so far and the pair being typed."""

    key_input: str = ""
    value_input: str = ""
    pairs: dict[str, str] = field(default_factory=dict)
    current_screen: CurrentScreen = CurrentScreen.MAIN
    currently_editing: Optional[CurrentlyEditing] = None

    def save_key_value(self) -> None:
        """Store the typed pair and clear the inputs."""
        self.pairs[self.key_input] = self.value_input
        self.key_input = ""
        self.value_input = ""
        self.currently_editing = None

    def toggle_editing(self) -> None:
        """Switch between the key and value boxes, starting with the key."""
        if self.currently_editing is CurrentlyEditing.KEY:
            self.currently_editing = CurrentlyEditing.VALUE
        else:
            self.currently_editing = CurrentlyEditing.KEY

    def to_json(self) -> str:
        """The pairs as a compact JSON object."""
        return json.dumps(self.pairs, separators=(",", ":"), ensure_ascii=False)

    def print_json(self) -> str:
        """Write the pairs as JSON to standard output and return the text written."""
        output = self.to_json()
        sys.stdout.write(output + "\n")
        sys.stdout.flush()
        return output