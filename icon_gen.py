"""Generate the picker icon (64×64 PIL Image, in-memory)."""

from PIL import Image, ImageDraw, ImageFont

from date_utils import DateUtils


def create_icon_image(utils: DateUtils | None = None, size: int = 64) -> Image.Image:
    """Return a square RGBA image: today's day of month in black on white."""
    utils = utils or DateUtils()
    img = Image.new("RGBA", (size, size), "white")
    draw = ImageDraw.Draw(img)

    label = utils.format(utils.date(), "dayOfMonth")

    # Find the largest font size that fits the icon
    font_size = size * 2
    font = None
    while font_size > 10:
        try:
            font = ImageFont.truetype("segoeuib.ttf", font_size)
        except OSError:
            font = ImageFont.load_default()
            break
        bbox = draw.textbbox((0, 0), label, font=font)
        if bbox[2] - bbox[0] <= size and bbox[3] - bbox[1] <= size:
            break
        font_size -= 1

    # Centre the visible pixels (compensate for font metric offsets)
    bbox = draw.textbbox((0, 0), label, font=font)
    x = (size - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = (size - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), label, fill="black", font=font)

    return img
