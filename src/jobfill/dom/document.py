"""Form document model over a BeautifulSoup tree.

``FormDocument`` is the page every fill strategy works against. It keeps
the HTML semantics the strategies rely on (input/select/textarea values,
radio groups, label resolution) and records every dispatched event in
``FormDocument.events`` so callers can observe what a fill did.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, NamedTuple

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

CONTROL_SELECTOR = "input, select, textarea"


class Option(NamedTuple):
    """One ``<option>`` of a dropdown: submitted value and display text."""

    value: str
    text: str


@dataclass(frozen=True)
class DomEvent:
    """An event dispatched on a control."""

    type: str
    target: Control
    bubbles: bool = True


EventListener = Callable[[DomEvent], None]


def _collapse(text: str) -> str:
    return " ".join(text.split())


class Control:
    """A live reference to one form control inside a ``FormDocument``.

    Two ``Control`` objects are equal when they wrap the same element, so
    repeated queries for the same node compare equal.
    """

    def __init__(self, document: FormDocument, tag: Tag) -> None:
        self.document = document
        self.tag = tag

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Control) and other.tag is self.tag

    def __hash__(self) -> int:
        return id(self.tag)

    def __repr__(self) -> str:
        ident = self.id or self.name or "?"
        return f"<Control {self.tag_name} {ident!r}>"

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def attr(self, name: str) -> str:
        """Return an attribute as a string (``""`` when absent)."""
        value = self.tag.get(name)
        if value is None:
            return ""
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    @property
    def tag_name(self) -> str:
        return self.tag.name.lower()

    @property
    def is_select(self) -> bool:
        return self.tag_name == "select"

    @property
    def name(self) -> str:
        return self.attr("name")

    @property
    def id(self) -> str:
        return self.attr("id")

    @property
    def placeholder(self) -> str:
        return self.attr("placeholder")

    @property
    def aria_label(self) -> str:
        return self.attr("aria-label")

    @property
    def input_type(self) -> str:
        """The control's ``type`` as the browser reports it."""
        if self.tag_name == "select":
            return "select-multiple" if self.tag.has_attr("multiple") else "select-one"
        if self.tag_name == "textarea":
            return "textarea"
        return self.attr("type").strip().lower() or "text"

    # ------------------------------------------------------------------
    # Value / checked state
    # ------------------------------------------------------------------

    def _option_tags(self) -> list[Tag]:
        return self.tag.find_all("option")

    @staticmethod
    def _option_value(option: Tag) -> str:
        value = option.get("value")
        if value is None:
            return _collapse(option.get_text())
        return str(value)

    @property
    def options(self) -> list[Option]:
        """The live option catalog (empty for anything but a select)."""
        if not self.is_select:
            return []
        return [Option(self._option_value(opt), _collapse(opt.get_text())) for opt in self._option_tags()]

    @property
    def value(self) -> str:
        if self.is_select:
            if id(self.tag) in self.document._unselected:
                return ""
            option_tags = self._option_tags()
            for opt in option_tags:
                if opt.has_attr("selected"):
                    return self._option_value(opt)
            return self._option_value(option_tags[0]) if option_tags else ""
        if self.tag_name == "textarea":
            return self.tag.get_text()
        return self.attr("value")

    @value.setter
    def value(self, new_value: object) -> None:
        text = "" if new_value is None else str(new_value)
        if self.is_select:
            matched = False
            for opt in self._option_tags():
                if not matched and self._option_value(opt) == text:
                    opt["selected"] = ""
                    matched = True
                elif opt.has_attr("selected"):
                    del opt["selected"]
            # A select assigned an unknown value has no selection at all.
            if matched:
                self.document._unselected.discard(id(self.tag))
            else:
                self.document._unselected.add(id(self.tag))
        elif self.tag_name == "textarea":
            self.tag.string = text
        else:
            self.tag["value"] = text

    @property
    def checked(self) -> bool:
        return self.tag.has_attr("checked")

    @checked.setter
    def checked(self, state: bool) -> None:
        if not state:
            if self.tag.has_attr("checked"):
                del self.tag["checked"]
            return
        if self.input_type == "radio" and self.name:
            for other in self.document.soup.find_all("input", attrs={"type": "radio", "name": self.name}):
                if other is not self.tag and other.has_attr("checked"):
                    del other["checked"]
        self.tag["checked"] = ""

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def dispatch(self, *event_types: str) -> None:
        """Dispatch bubbling events of the given types, in order."""
        for event_type in event_types:
            self.document.dispatch(self, event_type)


class FormDocument:
    """A parsed HTML page exposing form controls and an event log.

    Args:
        source: HTML markup or an already-parsed ``BeautifulSoup`` tree.
        parser: BeautifulSoup parser name used when *source* is markup.
    """

    def __init__(self, source: str | bytes | BeautifulSoup, *, parser: str = "html.parser") -> None:
        self.soup = source if isinstance(source, BeautifulSoup) else BeautifulSoup(source, parser)
        self.events: list[DomEvent] = []
        self._listeners: dict[str, list[EventListener]] = defaultdict(list)
        self._unselected: set[int] = set()

    @classmethod
    def from_file(cls, path: str | Path, *, parser: str = "html.parser") -> FormDocument:
        """Parse an HTML file from disk."""
        return cls(Path(path).read_text(encoding="utf-8"), parser=parser)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def query(self, selector: str) -> Control | None:
        """Return the first control matching a CSS selector, or ``None``."""
        tag = self.soup.select_one(selector)
        if tag is None:
            return None
        return Control(self, tag)

    def query_all(self, selector: str) -> list[Control]:
        """Return every element matching a CSS selector, in document order."""
        return [Control(self, tag) for tag in self.soup.select(selector)]

    def controls(self) -> list[Control]:
        """Every ``input``, ``select`` and ``textarea`` on the page."""
        return self.query_all(CONTROL_SELECTOR)

    def radio_group(self, control: Control) -> list[Control]:
        """Radios sharing *control*'s ``name``, in document order.

        An unnamed radio forms a group of its own.
        """
        if not control.name:
            return [control]
        tags = self.soup.find_all("input", attrs={"type": "radio", "name": control.name})
        return [Control(self, tag) for tag in tags]

    def label_text(self, control: Control) -> str:
        """Resolve a control's label, lower-cased.

        Order: ``label[for=id]``, then the nearest enclosing ``label``,
        then ``aria-label``; ``""`` when none applies.
        """
        if control.id:
            label = self.soup.find("label", attrs={"for": control.id})
            if label is not None:
                return label.get_text().lower()
        parent = control.tag.find_parent("label")
        if parent is not None:
            return parent.get_text().lower()
        if control.aria_label:
            return control.aria_label.lower()
        return ""

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def add_event_listener(self, event_type: str, listener: EventListener) -> None:
        """Register *listener* for events of *event_type* on any control."""
        self._listeners[event_type].append(listener)

    def dispatch(self, control: Control, event_type: str) -> DomEvent:
        """Record a bubbling event on *control* and notify listeners."""
        event = DomEvent(type=event_type, target=control)
        self.events.append(event)
        for listener in list(self._listeners[event_type]):
            listener(event)
        return event

    def events_for(self, control: Control) -> list[str]:
        """Event types dispatched on *control*, in order."""
        return [event.type for event in self.events if event.target == control]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_html(self) -> str:
        """Serialize the (possibly filled) page back to markup."""
        return str(self.soup)
