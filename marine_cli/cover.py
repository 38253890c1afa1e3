from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

PAD = 16


def resize_to_width(im, target_w):
    new_h = int(im.height * target_w / im.width)
    return im.resize((target_w, new_h))


def make_cover(chart_paths, out_path, title="Rotterdam Weather Forecast") -> Path:
    """Stack the chart images at a common width with a centered title."""
    missing = [str(p) for p in chart_paths if not Path(p).exists()]
    if missing:
        raise FileNotFoundError(f"Missing chart images: {', '.join(missing)}")

    images = [Image.open(p).convert("RGB") for p in chart_paths]
    w = min(im.width for im in images)
    images = [resize_to_width(im, w) for im in images]

    title_h = 48
    H = sum(im.height for im in images) + title_h + PAD * (len(images) + 2)
    W = w + PAD * 2
    canvas = Image.new("RGB", (W, H), "white")

    draw = ImageDraw.Draw(canvas)
    font = ImageFont.load_default()
    tw, th = draw.textbbox((0, 0), title, font=font)[2:]
    draw.text(((W - tw) // 2, PAD + (title_h - th) // 2), title, fill="#3B3BFF", font=font)

    y = PAD + title_h
    for im in images:
        canvas.paste(im, (PAD, y))
        y += im.height + PAD

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    canvas.save(out_path, optimize=True)
    return out_path
