class Timers:
    """Delay and sound timers, stepped once per completed cycle."""

    def __init__(self):
        self.delay = 0
        self.sound = 0

    def tick(self):
        """Decrement both timers; returns True when sound goes from 1 to 0."""
        # Delay timer
        if self.delay > 0:
            self.delay -= 1
        # Sound timer
        if self.sound > 0:
            self.sound -= 1
            return self.sound == 0
        return False

    def reset(self):
        self.delay = 0
        self.sound = 0
