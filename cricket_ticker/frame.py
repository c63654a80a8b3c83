"""
Frame model handed to a renderer.

A `GlyphFrame` is three layers (low, mid, top) of positioned `GlyphObject`s.
Each object carries either text or a Pillow image, an (x, y) position, a
0-255 brightness, a percentage scale and, for text, the current scroll
offset. Renderers decide how (and whether) to wrap the scroll offset.
"""

from dataclasses import dataclass, field
from PIL import Image, ImageDraw


@dataclass(frozen=True)
class GlyphObject:
    text: str = None
    image: Image.Image = None
    x: int = 0
    y: int = 0
    brightness: int = 255
    scale: int = 100
    scroll: int = 0

    @property
    def is_text(self):
        return self.text is not None


@dataclass(frozen=True)
class GlyphFrame:
    low: tuple = ()
    mid: tuple = ()
    top: tuple = ()
    view: str = ""

    def objects(self):
        """Draw order: low, then mid, then top."""
        return list(self.low) + list(self.mid) + list(self.top)

    def texts(self):
        return [o.text for o in self.objects() if o.is_text]

    @property
    def text(self):
        return " ".join(self.texts())


@dataclass
class FrameBuilder:
    view: str = ""
    low: list = field(default_factory=list)
    mid: list = field(default_factory=list)
    top: list = field(default_factory=list)

    def add_low(self, obj):
        self.low.append(obj); return self

    def add_mid(self, obj):
        self.mid.append(obj); return self

    def add_top(self, obj):
        self.top.append(obj); return self

    def build(self):
        return GlyphFrame(low=tuple(self.low), mid=tuple(self.mid), top=tuple(self.top), view=self.view)


def create_circle_image(radius, brightness):
    size = radius * 2 + 1
    img = Image.new("L", (size, size), 0)
    ImageDraw.Draw(img).ellipse((0, 0, size - 1, size - 1), fill=brightness)
    return img
