from go_include.formatter.goimports import GoimportsFormatter, IdentityFormatter

__all__ = [
    "GoimportsFormatter",
    "IdentityFormatter",
]
