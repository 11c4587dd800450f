from types import MappingProxyType


def get_renderer_config():
    """
    Fixed settings for the markdown conversion pipeline.

    The engine has no user-facing options: extensions are always on and the
    output shape never changes. This table only keeps the constants the
    individual processors share in one place.
    """
    return {
        # Two columns of indentation open one nested list level
        "indent_width": 2,
        "fence_chars": ("`", "~"),
        "min_fence_length": 3,
        # Fenced blocks with these language tags are rendered client-side
        "diagram_languages": frozenset({"mermaid", "plantuml"}),
        "plantuml_label": "[PlantUML Diagram]",
        # Lines starting with one of these tags are never wrapped in <p>
        "block_tags": (
            "table",
            "thead",
            "tbody",
            "tr",
            "th",
            "td",
            "ul",
            "ol",
            "li",
            "blockquote",
            "pre",
            "h1",
            "h2",
            "h3",
            "h4",
            "h5",
            "h6",
            "hr",
            "div",
        ),
        "table_alignments": MappingProxyType(
            {
                (True, False): "left",
                (True, True): "center",
                (False, True): "right",
            }
        ),
    }
