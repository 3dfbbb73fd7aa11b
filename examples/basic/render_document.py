"""Render an editor JSON document to HTML with default config."""

from richblok import render

story = {
    "type": "doc",
    "content": [
        {"type": "heading", "attrs": {"level": 1}, "content": [{"type": "text", "text": "Hello"}]},
        {
            "type": "paragraph",
            "content": [
                {"type": "text", "text": "Fish & "},
                {"type": "text", "text": "chips", "marks": [{"type": "bold"}, {"type": "italic"}]},
            ],
        },
    ],
}

print(render(story))
