import argparse
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from klondike.Model import NUM_PER_SUIT, RANK_NAMES, RED_SUITS, SUITS

DISPLAY_W, DISPLAY_H = 110, 150
SCALE = 4
W, H = DISPLAY_W * SCALE, DISPLAY_H * SCALE

# file stems the web front end loads: heart_1.png .. spade_13.png, back.png
SUIT_FILES = {"hearts": "heart", "diamonds": "diamond", "clubs": "club", "spades": "spade"}

OUT_DIR = Path(__file__).resolve().parents[1] / "playing_cards"

RED = (196, 36, 44)
BLACK = (28, 28, 36)
PAPER = (251, 249, 243)


def get_font(size):
    for name in ("DejaVuSans-Bold.ttf", "Arial.ttf", "Helvetica.ttc"):
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue
    return ImageFont.load_default()


def paint_suit(draw, suit, cx, cy, size, fill):
    """Draws a suit glyph of roughly `size` pixels centred on (cx, cy)."""
    h = size // 2
    q = size // 4
    if suit == "diamonds":
        draw.polygon([(cx, cy - h), (cx + h * 3 // 4, cy), (cx, cy + h), (cx - h * 3 // 4, cy)], fill=fill)
        return
    if suit == "hearts":
        draw.ellipse((cx - h, cy - h, cx, cy), fill=fill)
        draw.ellipse((cx, cy - h, cx + h, cy), fill=fill)
        draw.polygon([(cx - h, cy - q // 2), (cx + h, cy - q // 2), (cx, cy + h)], fill=fill)
        return
    # spades and clubs share the stem
    draw.polygon([(cx, cy + q), (cx - q, cy + h), (cx + q, cy + h)], fill=fill)
    if suit == "spades":
        draw.ellipse((cx - h, cy - q, cx, cy + q), fill=fill)
        draw.ellipse((cx, cy - q, cx + h, cy + q), fill=fill)
        draw.polygon([(cx - h, cy), (cx + h, cy), (cx, cy - h)], fill=fill)
    else:
        r = size * 3 // 10
        for ox, oy in ((0, -q), (-q, q // 2), (q, q // 2)):
            draw.ellipse((cx + ox - r // 2, cy + oy - r // 2, cx + ox + r // 2, cy + oy + r // 2), fill=fill)


def card_file_name(suit, rank):
    return f"{SUIT_FILES[suit]}_{rank}.png"


def render_front(suit, rank):
    color = RED if suit in RED_SUITS else BLACK
    img = Image.new("RGB", (W, H), PAPER)
    d = ImageDraw.Draw(img)
    d.rounded_rectangle((0, 0, W - 1, H - 1), radius=8 * SCALE, fill=PAPER, outline=(70, 70, 80), width=SCALE)

    label = RANK_NAMES[rank - 1]
    corner = get_font(15 * SCALE)
    for flip in (False, True):
        layer = Image.new("RGBA", (26 * SCALE, 36 * SCALE), (0, 0, 0, 0))
        ld = ImageDraw.Draw(layer)
        ld.text((3 * SCALE, 0), label, fill=color, font=corner)
        paint_suit(ld, suit, 10 * SCALE, 26 * SCALE, 10 * SCALE, color)
        if flip:
            img.paste(layer.rotate(180), (W - 30 * SCALE, H - 40 * SCALE), layer.rotate(180))
        else:
            img.paste(layer, (4 * SCALE, 4 * SCALE), layer)

    if rank > 10:
        # court cards: framed letter over a suit
        inset = 26 * SCALE
        d.rectangle((inset, inset, W - inset, H - inset), outline=color, width=2 * SCALE)
        d.text((W // 2 - 10 * SCALE, H // 2 - 28 * SCALE), label, fill=color, font=get_font(28 * SCALE))
        paint_suit(d, suit, W // 2, H // 2 + 18 * SCALE, 20 * SCALE, color)
    else:
        paint_suit(d, suit, W // 2, H // 2, (36 if rank == 1 else 28) * SCALE, color)
    return img.resize((DISPLAY_W, DISPLAY_H), Image.Resampling.LANCZOS)


def render_back():
    img = Image.new("RGB", (W, H), (26, 58, 92))
    d = ImageDraw.Draw(img)
    for y in range(0, H, 8 * SCALE):
        d.rectangle((0, y, W, y + 3 * SCALE), fill=(40, 82, 124))
    d.rounded_rectangle((4 * SCALE, 4 * SCALE, W - 4 * SCALE, H - 4 * SCALE),
                        radius=6 * SCALE, outline=(230, 214, 170), width=2 * SCALE)
    return img.resize((DISPLAY_W, DISPLAY_H), Image.Resampling.LANCZOS)


def generate(out_dir: Path, suits=SUITS) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for suit in suits:
        for rank in range(1, NUM_PER_SUIT + 1):
            path = out_dir / card_file_name(suit, rank)
            render_front(suit, rank).save(path, "PNG")
            written.append(path)
    back = out_dir / "back.png"
    render_back().save(back, "PNG")
    written.append(back)
    return written


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render Klondike card faces and back as PNG.")
    parser.add_argument("--out", type=Path, default=OUT_DIR)
    args = parser.parse_args(argv)
    written = generate(args.out)
    print(f"Generated {len(written)} card images in {args.out}.")


if __name__ == "__main__":
    main()
