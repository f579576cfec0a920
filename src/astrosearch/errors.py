"""Exceptions raised by the astrosearch package. Note that the absence of an event (for example a
body that never sets) is not an error, finders return None in that case."""

#==============================================================
# Copyright Jody M Sankey 2020
#
# This software may be modified and distributed under the terms
# of the MIT license. See the LICENCE.md file for details.
#==============================================================
# PublicPermissions: True
#==============================================================


class AstroError(Exception):
    """Base class for all astrosearch errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidDateError(AstroError):
    """A calendar date or instant is outside the range the time model supports."""


class InvalidArgumentError(AstroError, ValueError):
    """A numeric argument was non-finite or otherwise unusable."""


class SearchDidNotConvergeError(AstroError):
    """An iterative refinement exceeded its iteration limit."""


class NoBracketError(AstroError):
    """No interval containing the event could be found within the allowed attempts."""


class InternalError(AstroError):
    """A consistency check on a computed result failed."""
