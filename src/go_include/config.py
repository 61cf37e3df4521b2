import os

from go_include.models import DEFAULT_BUILD_TAG


def get_goimports_command() -> str:
    return os.getenv("GO_INCLUDE_GOIMPORTS", "goimports")


def get_default_build_tag() -> str:
    return os.getenv("GO_INCLUDE_BUILD_TAG") or DEFAULT_BUILD_TAG
