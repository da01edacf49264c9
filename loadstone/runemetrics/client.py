"""RuneMetrics client — player stats and quest log merged into one profile."""

from __future__ import annotations

import asyncio
import logging

import httpx
from pydantic import ValidationError

from loadstone.config import CacheOptions, Settings
from loadstone.fetch import RequestFailedError, RequestOptions, fetch_json

from .models import Profile, ProfilePayload, Quest, QuestsPayload, skill_name

logger = logging.getLogger(__name__)

_FETCH_ERRORS = (httpx.HTTPError, RequestFailedError, ValueError)


class RuneMetricsClient:
    """Fetches a player's profile and quest list concurrently."""

    def __init__(
        self,
        *,
        cache: CacheOptions | None = None,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._cache = cache
        self._transport = transport

    @property
    def profile_url(self) -> str:
        return f"{self._settings.runemetrics_url}/profile/profile"

    @property
    def quests_url(self) -> str:
        return f"{self._settings.runemetrics_url}/quests"

    async def get_profile(self, username: str) -> Profile | None:
        """Return the merged profile, or ``None`` if it is private, missing or unreachable.

        The quest list is best-effort: if it cannot be fetched the profile
        is still returned with an empty quest list.
        """
        async with httpx.AsyncClient(
            transport=self._transport,
            follow_redirects=True,
            timeout=self._settings.request_timeout,
            headers={"User-Agent": self._settings.user_agent},
        ) as client:
            payload, quests = await asyncio.gather(
                self._fetch_stats(client, username),
                self._fetch_quests(client, username),
            )

        if payload is None:
            return None

        skills = {skill_name(sv.id): sv.level for sv in payload.skillvalues}
        profile = Profile(
            name=payload.name,
            combat_level=payload.combatlevel,
            total_skill=payload.totalskill,
            total_xp=payload.totalxp,
            quests_complete=payload.questscomplete,
            quests_started=payload.questsstarted,
            quests_not_started=payload.questsnotstarted,
            skills=skills,
            quests=quests if quests is not None else [],
            raw=payload.model_dump(exclude_unset=True),
        )
        logger.debug(
            "profile loaded",
            extra={"username": username, "skills": len(skills), "quests": len(profile.quests)},
        )
        return profile

    async def _fetch_stats(self, client: httpx.AsyncClient, username: str) -> ProfilePayload | None:
        try:
            data = await fetch_json(
                client,
                self.profile_url,
                request=RequestOptions(params={"user": username, "skillvalues": ""}),
                cache=self._cache,
                settings=self._settings,
            )
            payload = ProfilePayload.model_validate(data)
        except _FETCH_ERRORS:
            logger.warning("runemetrics profile fetch failed", extra={"username": username}, exc_info=True)
            return None

        if payload.error is not None:
            logger.info("runemetrics profile unavailable", extra={"username": username, "error": payload.error})
            return None
        return payload

    async def _fetch_quests(self, client: httpx.AsyncClient, username: str) -> list[Quest] | None:
        try:
            data = await fetch_json(
                client,
                self.quests_url,
                request=RequestOptions(params={"user": username}),
                cache=self._cache,
                settings=self._settings,
            )
            rows = QuestsPayload.model_validate(data).quests
        except _FETCH_ERRORS:
            logger.warning(
                "runemetrics quests fetch failed, continuing without quests",
                extra={"username": username},
                exc_info=True,
            )
            return None

        quests = []
        for row in rows:
            try:
                quests.append(Quest.model_validate(row))
            except ValidationError:
                logger.debug("skipping malformed quest record", extra={"username": username, "record": row})
        return quests
