"""Page-side collaborators: button placeholders and navigation"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Protocol


@dataclass
class ButtonPlaceholder:
    """Element tagged to host a wallet button; carries price and description data"""

    dataset: Dict[str, str]
    children: List[Any] = field(default_factory=list)
    hidden: bool = False

    @property
    def price(self) -> Optional[str]:
        return self.dataset.get("price")

    @property
    def description(self) -> Optional[str]:
        return self.dataset.get("description")

    def replace_content(self, element: Any) -> None:
        self.children.clear()
        self.children.append(element)

    def hide(self) -> None:
        self.hidden = True


class Page(Protocol):
    def button_placeholders(self) -> Iterable[ButtonPlaceholder]: ...

    def navigate(self, url: str) -> None: ...


@dataclass
class StaticPage:
    """In-memory page holding a fixed set of placeholders"""

    placeholders: List[ButtonPlaceholder] = field(default_factory=list)
    location: Optional[str] = None

    def button_placeholders(self) -> Iterable[ButtonPlaceholder]:
        return list(self.placeholders)

    def navigate(self, url: str) -> None:
        self.location = url
