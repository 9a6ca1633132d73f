"""hidsite static site builder.

This package builds an in-memory model of a static site from a source tree of
layouts, dated posts, pages and plain files, then renders it through a
pluggable processor.

The core is the content graph: every source path is classified exactly once,
in the fixed order layouts, posts, pages, assets. Later phases rely on the
classifier already holding every path claimed by earlier ones.

The main entry point is the CLI module, which provides commands for building
a site and inspecting how its files were classified.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
