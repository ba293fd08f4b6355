"""Widget visibility policy driven by the presence signal."""

from __future__ import annotations


class VisibilityPolicy:
    """
    Two-state hide/restore machine.

    Full-screen content hides a visible widget; once it ends, the widget comes
    back only if it was the signal that hid it. A widget the user hid stays hidden.
    """

    def __init__(self, visible: bool = True):
        self.visible = visible
        self.hidden_by_fullscreen = False

    def update(self, fullscreen: bool) -> bool:
        """
        Apply one presence reading.

        Args:
            fullscreen: Current value of the presence signal

        Returns:
            Visibility after the reading
        """
        if fullscreen and self.visible:
            self.visible = False
            self.hidden_by_fullscreen = True
            print("[INFO] Full-screen content detected, hiding roster")
        elif not fullscreen and self.hidden_by_fullscreen and not self.visible:
            self.visible = True
            self.hidden_by_fullscreen = False
            print("[INFO] Full-screen content ended, showing roster")
        return self.visible

    def toggle(self) -> bool:
        """User show/hide. Clears any pending full-screen restore."""
        self.visible = not self.visible
        self.hidden_by_fullscreen = False
        return self.visible
