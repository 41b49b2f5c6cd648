from typing import Protocol

class IdProvider(Protocol):
    """Port odpowiedzialny za generowanie unikalnych, nigdy nie powtarzanych identyfikatorów."""
    def new_id(self) -> str:
        ...
