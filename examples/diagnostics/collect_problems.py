"""Render a document with unsupported content and report what was dropped.

The teaser block and the text under the unknown ``textStyle`` mark both
render as empty strings. The diagnostics say why.
"""

from richblok import collect_diagnostics, render

story = {
    "type": "doc",
    "content": [
        {"type": "paragraph", "content": [{"type": "text", "text": "kept"}]},
        {"type": "blok", "attrs": {"component": "teaser"}},
        {"type": "text", "text": "dropped", "marks": [{"type": "textStyle"}]},
    ],
}

with collect_diagnostics() as problems:
    html = render(story)

print(html)
for problem in problems:
    print(problem)
