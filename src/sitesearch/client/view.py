"""Display regions owned by the pagination engine: a card pool and page controls"""

from dataclasses import dataclass, field


@dataclass
class Card:
    html: str = ""
    visible: bool = False


@dataclass(frozen=True)
class PageControl:
    page: int
    label: str
    active: bool = False


@dataclass
class ContentView:
    """Pool of card elements reused by position; cards are hidden, never removed."""
    cards: list[Card] = field(default_factory=list)

    def card_at(self, index: int) -> Card:
        """Existing card at index, or a newly appended one when the pool is shorter."""
        while len(self.cards) <= index:
            self.cards.append(Card())
        return self.cards[index]

    def hide_all(self) -> None:
        for card in self.cards:
            card.visible = False

    def visible_cards(self) -> list[Card]:
        return [c for c in self.cards if c.visible]


@dataclass
class PaginationView:
    html: str = ""
    controls: list[PageControl] = field(default_factory=list)


@dataclass
class DisplayView:
    content: ContentView = field(default_factory=ContentView)
    pagination: PaginationView = field(default_factory=PaginationView)
