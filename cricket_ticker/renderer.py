import threading
import unicodedata
from PIL import Image, ImageDraw, ImageFont

from cricket_ticker.config import MATRIX_SIZE

SCROLL_GAP = 10


def normalize_special_chars(text):
    """Folds accents and typographic punctuation down to ASCII for the bitmap font."""
    if not text:
        return text
    replacements = {'‘': "'", '’': "'", '“': '"', '”': '"', '–': '-', '—': '-'}
    result = []
    for char in str(text):
        if char in replacements:
            result.append(replacements[char])
        elif ord(char) < 128:
            result.append(char)
        else:
            folded = ''.join(c for c in unicodedata.normalize('NFD', char) if not unicodedata.combining(c))
            result.append(folded if folded and all(ord(c) < 128 for c in folded) else '?')
    return ''.join(result)


class Renderer:
    """Rendering collaborator interface: accepts a GlyphFrame, or goes dark."""

    def render(self, frame):
        raise NotImplementedError

    def turn_off(self):
        pass


class ConsoleRenderer(Renderer):
    """Prints the frame text whenever it changes. Handy when running headless."""

    def __init__(self):
        self.last_text = None

    def render(self, frame):
        text = frame.text
        if text != self.last_text:
            print(f"🏏 [{frame.view}] {text}")
            self.last_text = text

    def turn_off(self):
        print("Display off")
        self.last_text = None


class FanoutRenderer(Renderer):
    def __init__(self, *renderers):
        self.renderers = list(renderers)

    def render(self, frame):
        for r in self.renderers:
            r.render(frame)

    def turn_off(self):
        for r in self.renderers:
            r.turn_off()

    def find(self, kind):
        return next((r for r in self.renderers if isinstance(r, kind)), None)


class ImageRenderer(Renderer):
    """Rasterizes frames onto a square greyscale Pillow image (one pixel per LED)."""

    def __init__(self, size=MATRIX_SIZE, font=None):
        self.size = size
        try: self.font = font or ImageFont.load_default()
        except Exception: self.font = None
        self.lock = threading.Lock()
        self.image = Image.new("L", (size, size), 0)
        self.frames_rendered = 0

    def render(self, frame):
        img = Image.new("L", (self.size, self.size), 0)
        for obj in frame.objects():
            if obj.is_text:
                self.draw_scrolling_text(img, obj.text, obj.x, obj.y, obj.scroll, obj.brightness)
            elif obj.image is not None:
                self.draw_image(img, obj.image, obj.x, obj.y, obj.brightness, obj.scale)
        with self.lock:
            self.image = img
            self.frames_rendered += 1
        return img

    def turn_off(self):
        with self.lock:
            self.image = Image.new("L", (self.size, self.size), 0)

    def snapshot(self):
        with self.lock:
            return self.image.copy()

    def draw_image(self, canvas, image, x, y, brightness, scale):
        src = image.convert("L")
        if scale and scale != 100:
            w = max(1, int(src.width * scale / 100)); h = max(1, int(src.height * scale / 100))
            src = src.resize((w, h))
        src = src.point(lambda p: int(p * brightness / 255))
        canvas.paste(src, (int(x), int(y)), src)

    def draw_scrolling_text(self, canvas, text_str, x, y, scroll_pos, brightness):
        text_str = normalize_special_chars(str(text_str).strip())
        d = ImageDraw.Draw(canvas)
        text_w = d.textlength(text_str, font=self.font)
        max_width = self.size - int(x)
        if text_w <= max_width:
            d.text((int(x), int(y)), text_str, font=self.font, fill=brightness)
            return
        total_loop = text_w + SCROLL_GAP
        current_offset = scroll_pos % total_loop
        d.text((int(x - current_offset), int(y)), text_str, font=self.font, fill=brightness)
        if (-current_offset + text_w) < max_width:
            d.text((int(x - current_offset + total_loop), int(y)), text_str, font=self.font, fill=brightness)
