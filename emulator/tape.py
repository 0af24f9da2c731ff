BLANK = "_"

LEFT = "l"
RIGHT = "r"
STAY = "*"


class Tape:
    """
    A tape that is infinite in both directions.

    Cells at index >= 0 live in `pos`, cells at index < 0 live in `neg`
    (neg[0] is index -1, neg[1] is index -2, ...). `left` and `right` are
    the signed edges of the materialised range; anything outside is blank.
    """

    def __init__(self, content=""):
        self.initialize(content)

    def initialize(self, content):
        self.pos = list(content) if content else [BLANK]
        self.neg = []
        self.head = 0
        self.left = 0
        self.right = len(self.pos) - 1

    def fetch(self, index):
        if index < 0:
            return self.neg[-1 - index]
        return self.pos[index]

    def read(self):
        return self.fetch(self.head)

    def write(self, symbol):
        if self.head < 0:
            self.neg[-1 - self.head] = symbol
        else:
            self.pos[self.head] = symbol

    def move(self, direction):
        if direction == LEFT:
            self.head -= 1
            if self.head < self.left:
                self.left -= 1
                self.neg.append(BLANK)
        elif direction == RIGHT:
            self.head += 1
            if self.head > self.right:
                self.right += 1
                self.pos.append(BLANK)

    def window(self):
        """Printable boundaries: outermost non-blank cells, never past the head."""
        left = self.left
        while left < self.head and self.fetch(left) == BLANK:
            left += 1
        right = self.right
        while right > self.head and self.fetch(right) == BLANK:
            right -= 1
        return left, right

    def cells(self, left=None, right=None):
        if left is None:
            left = self.left
        if right is None:
            right = self.right
        return [(index, self.fetch(index)) for index in range(left, right + 1)]

    def trimmed_content(self):
        left, right = self.window()
        return "".join(self.fetch(i) for i in range(left, right + 1)).strip(BLANK)

    def __repr__(self):
        return f"Tape(left={self.left}, right={self.right}, head={self.head})"
