"""ps2svg: PostScript plot log to SVG converter.

Converts the move / line / set-width instructions found in plotting-tool
dumps (e.g. ``fort.50``) into an SVG document for offline viewing.

Architecture layers (strict one-way dependency):
    scripts/ → pipeline → {extract, geometry, svg} → ps_ir → utils/

Key invariants:
    - Only lines between the start and end marker are parsed
    - Segments keep input order from extraction to emission
    - Uniform scale: the larger bounding-box side maps to target_size pixels
    - No NaN or infinity is ever written; degenerate input has a defined policy
    - YAML configs, validated with pydantic
"""

__version__ = "0.1.0"
