"""Display window over ranked entries."""
from dataclasses import dataclass

SHOW_ALL = 0
SIZE_CANDIDATES = (10, 20, 30)


@dataclass
class DisplayWindow:
    """How many ranked entries are visible at once.

    ``selected`` is the user's choice; ``SHOW_ALL`` (0) means every entry.
    ``total`` tracks the current number of ranked entries.
    """
    selected: int = 10
    total: int = 0
    default_size: int = 10

    def options(self) -> list[int]:
        """Size choices offered for the current total."""
        if self.total == 0:
            return []
        options: list[int] = []
        for value in [c for c in SIZE_CANDIDATES if c < self.total] + [self.total]:
            if value not in options:
                options.append(value)
        return options

    def resize(self, total: int) -> None:
        """Clamp the selection after the entry count changed."""
        self.total = total
        if total == 0:
            self.selected = SHOW_ALL
        elif self.selected == SHOW_ALL:
            self.selected = min(self.default_size, total)
        elif self.selected > total:
            self.selected = total

    def select(self, size: int) -> None:
        self.selected = max(SHOW_ALL, size)

    def reset(self) -> None:
        self.selected = self.default_size
        self.total = 0

    @property
    def display_count(self) -> int:
        if self.total == 0:
            return 0
        wanted = self.total if self.selected == SHOW_ALL else self.selected
        return min(wanted, self.total)

    @property
    def has_hidden(self) -> bool:
        return self.display_count < self.total

    def show_more(self) -> None:
        """Advance to the next larger option, or to the total."""
        current = self.display_count
        for option in self.options():
            if option > current:
                self.selected = option
                return
        self.selected = self.total
