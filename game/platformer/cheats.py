"""
Rolling cheat-code buffer fed one typed character at a time.
"""

from typing import Optional

CHEAT_GOLD = "NEYMAR"
CHEAT_SKIP = "MESSI"
CHEAT_SECRET = "THETRUECR7"
CHEAT_CODES = (CHEAT_GOLD, CHEAT_SKIP, CHEAT_SECRET)

BUFFER_LEN = 12


class CheatBuffer:
    """Keeps the last few letters/digits and reports a completed code"""

    def __init__(self):
        self.buffer = ""

    def feed(self, char: str) -> Optional[str]:
        """Returns the matched code (and clears the buffer), else None"""
        if len(char) != 1:
            return None
        char = char.upper()
        if not (("A" <= char <= "Z") or ("0" <= char <= "9")):
            return None
        self.buffer = (self.buffer + char)[-BUFFER_LEN:]
        for code in CHEAT_CODES:
            if self.buffer.endswith(code):
                self.buffer = ""
                return code
        return None
