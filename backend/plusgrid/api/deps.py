from __future__ import annotations

from fastapi import Depends

from plusgrid.core.settings import Settings, get_settings
from plusgrid.utils.olc import CodeFormat


def code_format_from_settings(settings: Settings) -> CodeFormat:
    """Build the code format; raises ValueError on a bad configuration."""

    return CodeFormat(
        alphabet=settings.code_alphabet,
        separator=settings.separator,
        separator_position=settings.separator_position,
        padding_character=settings.padding_character,
    )


def get_code_format(settings: Settings = Depends(get_settings)) -> CodeFormat:
    return code_format_from_settings(settings)
