class TurnController:
    """Current seat index and play direction for a fixed roster size."""

    def __init__(self, player_count: int, index: int = 0, direction: int = 1):
        if player_count <= 0:
            raise ValueError('player_count must be positive')
        self.player_count = player_count
        self.index = index
        self.direction = direction

    def advance(self, steps: int = 1) -> int:
        for _ in range(steps):
            self.index = (self.index + self.direction) % self.player_count
        return self.index

    def reverse(self) -> None:
        self.direction = -self.direction
