"""orgrender renderers.

Renderers turn the output buffer's enter/leave/flush calls into a target
format.

Available Renderers:
- HtmlRenderer: Renders org lines to HTML using the OutputSink pattern

Thread Safety:
A renderer collects footnotes for one conversion. Create one per call.

"""

from orgrender.renderers.html import HtmlRenderer
from orgrender.renderers.protocol import BufferView, Renderer

__all__ = ["HtmlRenderer", "Renderer", "BufferView"]
