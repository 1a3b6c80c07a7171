"""
This module contains variables that can permitted to be tweaked by the system environment. For
example, the title pattern of the sections dropped before rendering. Constants do NOT belong in
this module. Constants are values that are usually names for common options or settings that
should not be altered without making a code change. Constants should go into `./constants.py`
"""

import os
import re
from dataclasses import dataclass


@dataclass
class ENVConfig:
    """class for configuring enviorment parameters"""

    def _get_string(self, var: str, default_value: str = "") -> str:
        """attempt to get the value of var from the os environment; if not present return the
        default_value"""
        return os.environ.get(var, default_value)

    def _get_int(self, var: str, default_value: int) -> int:
        if value := self._get_string(var):
            return int(value)
        return default_value

    @property
    def EXCLUDED_SECTION_PATTERN(self) -> str:
        """case-insensitive regex matched against section titles; matching sections are dropped
        before renumbering. An empty value disables the exclusion."""
        return os.environ.get(
            "PLAYBOOK_EXCLUDED_SECTION_PATTERN", r"marketing/sales pipeline overview"
        )

    @property
    def ASSETS_DIR(self) -> str:
        """directory prefix of the images placed by the renderer and of the cover logo"""
        return self._get_string("PLAYBOOK_ASSETS_DIR", "assets")

    @property
    def PROSPECT_LOOKAHEAD(self) -> int:
        """number of lines after a numbered line searched for an Address/Phone/Email/Website field
        before the line is treated as an ordinary list item"""
        return self._get_int("PLAYBOOK_PROSPECT_LOOKAHEAD", 4)

    @property
    def KEY_POINTS_MAX_LINES(self) -> int:
        """maximum number of interior lines captured by a key-points box"""
        return self._get_int("PLAYBOOK_KEY_POINTS_MAX_LINES", 20)

    @property
    def EXAMPLE_MAX_LINES(self) -> int:
        """maximum number of interior lines captured by an example box"""
        return self._get_int("PLAYBOOK_EXAMPLE_MAX_LINES", 15)

    @property
    def EMAIL_MAX_LINES(self) -> int:
        """maximum number of lines, headers included, captured by an email template"""
        return self._get_int("PLAYBOOK_EMAIL_MAX_LINES", 30)

    @property
    def HOOK_POINT_MAX_LINES(self) -> int:
        """maximum number of content lines captured by a hook point"""
        return self._get_int("PLAYBOOK_HOOK_POINT_MAX_LINES", 5)

    @property
    def PROSPECT_MAX_LINES(self) -> int:
        """maximum number of lines scanned for the fields of one prospect record"""
        return self._get_int("PLAYBOOK_PROSPECT_MAX_LINES", 100)

    def excluded_section_re(self, pattern: "str | None" = None) -> "re.Pattern[str] | None":
        """Compile the exclusion pattern; `pattern` overrides the environment when given.

        Raises ValueError when the pattern is not a valid regular expression.
        """
        pattern = self.EXCLUDED_SECTION_PATTERN if pattern is None else pattern
        if not pattern:
            return None
        try:
            return re.compile(pattern, re.IGNORECASE)
        except re.error as error:
            raise ValueError(f"Invalid excluded section pattern {pattern!r}: {error}") from error


env_config = ENVConfig()
