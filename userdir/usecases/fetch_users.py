"""Use case for loading the full user directory from a ``UserSourcePort``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from userdir.domain.entities import UserRecord
from userdir.domain.ports import UserSourcePort
from userdir.usecases.error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)


@dataclass
class FetchUsers:
    """Use-case callable returning every record the source exposes.

    Raises:
        UseCaseError: For any failure of the underlying source, with a
            message suitable for display next to a retry action.
    """

    user_source: UserSourcePort

    def __call__(self) -> List[UserRecord]:
        try:
            users = self.user_source.fetch_users()
        except Exception as exc:
            mapped = map_api_error(
                exc,
                default_code="FETCH_FAILED",
                default_message="Failed to load users.",
            )
            LOGGER.warning("Fetching users failed (%s): %s", mapped.code, mapped.message)
            if mapped is exc:
                raise
            raise mapped from exc
        return list(users or [])


__all__ = ["FetchUsers"]
