from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

CARD_W, CARD_H = 9, 7
INNER_W, INNER_H = CARD_W - 2, CARD_H - 2
# pixels sampled per character cell
CELL_W, CELL_H = 8, 16
RANKS = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
# same order as klondike.Card.Suit
SUITS = ["♠", "♣", "♥", "♦"]
SHADES = " ░▒▓█"

OUT_PATH = Path(__file__).resolve().parents[1] / "cards.txt"


def get_font(size):
    for name in ("DejaVuSansMono-Bold.ttf", "DejaVuSans-Bold.ttf", "Arial.ttf", "Helvetica.ttc"):
        try:
            return ImageFont.truetype(name, size=size)
        except Exception:
            continue
    return ImageFont.load_default()


def rasterize(text, cols, rows):
    """Draw text centred in a cols x rows character grid and shade each cell by ink coverage."""
    w, h = cols * CELL_W, rows * CELL_H
    img = Image.new("L", (w, h), 0)
    d = ImageDraw.Draw(img)
    font = get_font(int(h * 0.9))
    left, top, right, bottom = d.textbbox((0, 0), text, font=font)
    d.text(((w - (right - left)) // 2 - left, (h - (bottom - top)) // 2 - top), text, fill=255, font=font)

    lines = []
    for r in range(rows):
        line = ""
        for c in range(cols):
            cell = img.crop((c * CELL_W, r * CELL_H, (c + 1) * CELL_W, (r + 1) * CELL_H))
            pixels = list(cell.getdata())
            coverage = sum(pixels) / (255.0 * len(pixels))
            line += SHADES[min(len(SHADES) - 1, int(coverage * len(SHADES)))]
        lines.append(line)
    return lines


def frame(body, corners="┌┐└┘", edge="─", side="│"):
    out = [corners[0] + edge * INNER_W + corners[1]]
    out += [side + line[:INNER_W].ljust(INNER_W) + side for line in body]
    out.append(corners[2] + edge * INNER_W + corners[3])
    return out


def draw_face(rank, suit):
    big = rasterize(rank, INNER_W, INNER_H - 2)
    body = [(rank + suit).ljust(INNER_W)] + big + [(suit + rank).rjust(INNER_W)]
    return frame(body)


def draw_back():
    return frame([("▚▞" * INNER_W)[:INNER_W]] * INNER_H)


def draw_empty():
    return frame([""] * INNER_H, edge="╌", side="╎")


def draw_marker(suit):
    return frame(rasterize(suit, INNER_W, INNER_H), corners="╔╗╚╝", edge="═", side="║")


def main():
    cards = [draw_back(), draw_empty()]
    cards += [draw_marker(s) for s in SUITS]
    for s in SUITS:
        for r in RANKS:
            cards.append(draw_face(r, s))
    OUT_PATH.parent.mkdir(parents=True, exist_ok=True)
    with OUT_PATH.open("w", encoding="utf-8") as f:
        for card in cards:
            f.write("\n".join(card) + "\n")
    print(f"Generated {len(cards)} ASCII cards into {OUT_PATH.name}.")


if __name__ == "__main__":
    main()
