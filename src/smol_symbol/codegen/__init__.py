"""Build-time symbol binding: generate Python modules of symbol constants."""

from .generate import (
    Binding,
    bind,
    generate,
    load_manifest,
    parse_manifest,
    render_module,
    resolve,
)
