"""Starter .diffgrade.toml template written by ``diffgrade init``."""

DEFAULT_TOML = """\
# diffgrade configuration
version = "1.0"

[output]
dir = "./results"
formats = ["json", "markdown"]   # json | markdown
show_summary = true

[detectors]
# enable = ["css-class-prefix", "select-rewrite"]   # empty = all enabled
# disable = ["test-selector-rewrite"]
custom_dir = ".diffgrade-detectors"

[structure]
enabled = true            # build structured views of JS/TS sources for detectors

[scoring]
# min_score = 70.0        # exit 1 when the overall score falls below this
"""
