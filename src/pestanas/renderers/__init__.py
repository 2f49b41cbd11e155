"""Pestañas renderers.

Renderers turn a tokenizer event stream into output markup.

Available Renderers:
- TagRenderer: nested ``<tabbed>`` / ``<tabbed-title>`` tags plus minimal
  paragraph and code markup

Thread Safety:
All per-render state lives in a RenderContext created by each render() call.

"""

from pestanas.renderers.protocol import EventRenderer
from pestanas.renderers.tags import TagRenderer, html_escape

__all__ = ["EventRenderer", "TagRenderer", "html_escape"]
