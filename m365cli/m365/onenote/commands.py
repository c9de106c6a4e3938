"""Names of the onenote commands."""

PREFIX = "onenote"

NOTEBOOK_LIST = f"{PREFIX} notebook list"
