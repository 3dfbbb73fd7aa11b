"""Build an image service URL with resize and filters."""

from richblok import optimize_image

image = optimize_image(
    "https://a.example.com/f/39898/3310x2192/e4ec08624e/demo-image.jpeg",
    {
        "width": 640,
        "height": 480,
        "loading": "lazy",
        "filters": {"quality": 80, "grayscale": True, "format": "webp"},
    },
)

attrs = " ".join(f'{k}="{v}"' for k, v in image.attrs.items())
print(f'<img src="{image.src}" {attrs}>')
