# mdengine/extensions/__init__.py
# Document helpers built on top of the renderer

from .outline import active_heading_line, build_outline, document_stats
from .toc_extractor import extract_toc, extract_toc_from_html
