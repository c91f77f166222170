"""Itinerary Store: itinerary day/item trees and the per-user current itinerary"""
import logging
from datetime import date, timedelta
from typing import AbstractSet, Any, Dict, List, Mapping, Optional, Sequence, Set, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..models import ITEM_STATUSES, Itinerary, ItineraryDay, ItineraryItem
from ..repositories import ItineraryRepository, UserRepository
from ..utils.errors import NotFoundError, ValidationError
from ..utils.identifiers import utc_now

logger = logging.getLogger(__name__)

DayInput = Union[Mapping[str, Any], BaseModel]

UPDATABLE_FIELDS = ("name", "destination", "start_date", "end_date", "days")


def parse_date(value: Union[str, date, None], field: str) -> date:
    """
    Accept a ``date`` or an ISO ``YYYY-MM-DD`` string

    Raises:
        ValidationError: If the value is missing or not a valid date
    """
    if isinstance(value, date):
        return value
    if not value:
        raise ValidationError.missing(field)
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValidationError.for_fields(
            f"Invalid {field}",
            [{"field": field, "message": "Expected a date in YYYY-MM-DD format"}],
        )


def empty_days(destination: str, start_date: date, number_of_days: int) -> List[ItineraryDay]:
    """``number_of_days`` empty days titled "Day N in <destination>", dated start_date + (N - 1)"""
    return [
        ItineraryDay(
            title=f"Day {n} in {destination}",
            date=start_date + timedelta(days=n - 1),
        )
        for n in range(1, number_of_days + 1)
    ]


def _as_dict(value: DayInput) -> Dict[str, Any]:
    if isinstance(value, BaseModel):
        return value.model_dump(exclude_none=True)
    return {key: val for key, val in dict(value).items() if val is not None}


def _claim_id(
    data: Dict[str, Any],
    seen: Set[str],
    keep_ids: AbstractSet[str],
    field: str,
    errors: List[Dict[str, str]],
) -> None:
    """Reject an id repeated within the itinerary; drop ids the itinerary does not already own"""
    supplied = data.get("id")
    if not supplied:
        return
    if supplied in seen:
        errors.append({"field": field, "message": "Duplicate id within the itinerary"})
    seen.add(supplied)
    if supplied not in keep_ids:
        del data["id"]


def build_days(
    raw_days: Sequence[DayInput],
    destination: str,
    start_date: date,
    max_days: int = 30,
    keep_ids: AbstractSet[str] = frozenset(),
) -> List[ItineraryDay]:
    """
    Turn caller-supplied day content into stored days

    Ids listed in ``keep_ids`` (those the itinerary already owns) are kept;
    every other day/item gets a fresh id so an item belongs to exactly one
    itinerary. A day without a date gets start_date + its index; a day
    without a title gets "Day N in <destination>".

    Raises:
        ValidationError: If the day count is outside 1..max_days, an id
            repeats, or a day or item is malformed (unknown type/status, bad date)
    """
    if not 1 <= len(raw_days) <= max_days:
        raise ValidationError.for_fields(
            "Invalid number of days",
            [{"field": "days", "message": f"Must contain between 1 and {max_days} days"}],
        )

    days: List[ItineraryDay] = []
    errors: List[Dict[str, str]] = []
    seen: Set[str] = set()

    for index, raw_day in enumerate(raw_days):
        data = _as_dict(raw_day)
        _claim_id(data, seen, keep_ids, f"days.{index}.id", errors)
        data.setdefault("title", f"Day {index + 1} in {destination}")
        if not data.get("date"):
            data["date"] = start_date + timedelta(days=index)
        data["items"] = [_as_dict(item) for item in data.get("items") or []]
        for position, item in enumerate(data["items"]):
            _claim_id(item, seen, keep_ids, f"days.{index}.items.{position}.id", errors)
        try:
            days.append(ItineraryDay.model_validate(data))
        except PydanticValidationError as e:
            for err in e.errors():
                location = ".".join(str(part) for part in err["loc"])
                errors.append({"field": f"days.{index}.{location}", "message": err["msg"]})

    if errors:
        raise ValidationError.for_fields("Invalid itinerary days", errors)
    return days


def _check_date_order(start: date, end: date) -> None:
    if end < start:
        raise ValidationError.for_fields(
            "End date must not be before start date",
            [{"field": "endDate", "message": "Must be on or after startDate"}],
        )


class ItineraryStore:
    """
    CRUD over itineraries plus the current-itinerary pointer.

    Ownership is not checked here: routes check it before calling
    ``update_itinerary``, ``delete_itinerary`` or ``update_item_status``.
    """

    def __init__(
        self,
        itineraries: ItineraryRepository,
        users: UserRepository,
        max_days: int = 30,
    ):
        self.itineraries = itineraries
        self.users = users
        self.max_days = max_days

    async def _set_current(self, user_id: str, itinerary_id: Optional[str]) -> None:
        """Point the user's current itinerary at ``itinerary_id`` (users without a record are skipped)"""
        user = await self.users.get(user_id)
        if user is None or user.current_itinerary_id == itinerary_id:
            return
        user.current_itinerary_id = itinerary_id
        await self.users.save(user)

    def check_number_of_days(self, number_of_days: Any) -> int:
        if number_of_days is None or number_of_days == "":
            raise ValidationError.missing("numberOfDays")
        try:
            count = int(number_of_days)
        except (TypeError, ValueError):
            count = 0
        if not 1 <= count <= self.max_days:
            raise ValidationError.for_fields(
                "Invalid number of days",
                [{"field": "numberOfDays", "message": f"Must be between 1 and {self.max_days}"}],
            )
        return count

    async def create_itinerary(
        self,
        user_id: str,
        name: Optional[str],
        destination: Optional[str],
        start_date: Union[str, date, None],
        number_of_days: Optional[int] = None,
        days: Optional[Sequence[DayInput]] = None,
        end_date: Union[str, date, None] = None,
    ) -> Itinerary:
        """
        Create an itinerary and make it the user's current one

        With explicit ``days`` the content is stored as given (fresh ids);
        otherwise ``number_of_days`` empty days are synthesized. A supplied
        ``number_of_days`` is range-checked either way.

        Args:
            user_id: Owner
            name: Itinerary name
            destination: Destination string
            start_date: First day (``date`` or ``YYYY-MM-DD``)
            number_of_days: Day count when no explicit days are given
            days: Explicit day content
            end_date: Defaults to start_date + (days - 1)

        Returns:
            The stored itinerary including generated ids

        Raises:
            ValidationError: If name, destination or start date is missing,
                the day count is out of range, or the day content is malformed
        """
        missing = [
            field for field, value in (
                ("name", name), ("destination", destination), ("startDate", start_date)
            )
            if not value or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise ValidationError.missing(*missing)

        start = parse_date(start_date, "startDate")
        if number_of_days is not None:
            self.check_number_of_days(number_of_days)
        if days:
            built_days = build_days(days, destination, start, max_days=self.max_days)
        else:
            built_days = empty_days(destination, start, self.check_number_of_days(number_of_days))

        if end_date:
            end = parse_date(end_date, "endDate")
        else:
            end = start + timedelta(days=max(len(built_days), 1) - 1)
        _check_date_order(start, end)

        itinerary = await self.itineraries.add(Itinerary(
            user_id=user_id,
            name=name.strip(),
            destination=destination.strip(),
            start_date=start,
            end_date=end,
            days=built_days,
        ))
        await self._set_current(user_id, itinerary.id)
        logger.info(
            "Created itinerary %s for user %s (%d days)",
            itinerary.id, user_id, len(itinerary.days)
        )
        return itinerary

    async def get_current_itinerary(self, user_id: str) -> Itinerary:
        """
        The user's current itinerary: the pointer if it is still valid,
        otherwise the most recently updated one

        Raises:
            NotFoundError: If the user has no itineraries
        """
        user = await self.users.get(user_id)
        if user and user.current_itinerary_id:
            itinerary = await self.itineraries.get(user.current_itinerary_id)
            if itinerary and itinerary.user_id == user_id:
                return itinerary

        owned = await self.itineraries.list_for_user(user_id)
        if not owned:
            raise NotFoundError("No active itinerary found")
        return owned[0]

    async def get_user_itineraries(self, user_id: str) -> List[Itinerary]:
        """All itineraries owned by the user, most recently updated first"""
        return await self.itineraries.list_for_user(user_id)

    async def get_itinerary_by_id(self, itinerary_id: str) -> Itinerary:
        itinerary = await self.itineraries.get(itinerary_id)
        if itinerary is None:
            raise NotFoundError("Itinerary not found")
        return itinerary

    async def get_itinerary_by_item_id(self, item_id: str) -> Itinerary:
        """
        Raises:
            NotFoundError: If no itinerary contains the item
        """
        itinerary = await self.itineraries.find_by_item_id(item_id)
        if itinerary is None:
            raise NotFoundError("Item not found in any itinerary")
        return itinerary

    async def update_itinerary(self, itinerary_id: str, changes: Mapping[str, Any]) -> Itinerary:
        """
        Apply a partial update; keys left out or set to ``None`` keep their value

        Supplied ``days`` replace the whole day list (ids this itinerary
        already owns are kept, any other day/item gets a fresh id).

        Raises:
            NotFoundError: If the itinerary does not exist
            ValidationError: If a supplied value is blank or malformed, or the
                end date ends up before the start date
        """
        itinerary = await self.get_itinerary_by_id(itinerary_id)
        changes = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS and value is not None}

        for field in ("name", "destination"):
            if field in changes:
                value = str(changes[field]).strip()
                if not value:
                    raise ValidationError.missing(field)
                setattr(itinerary, field, value)
        if "start_date" in changes:
            itinerary.start_date = parse_date(changes["start_date"], "startDate")
        if "end_date" in changes:
            itinerary.end_date = parse_date(changes["end_date"], "endDate")
        if "days" in changes:
            owned_ids = {day.id for day in itinerary.days} | {item.id for item in itinerary.iter_items()}
            itinerary.days = build_days(
                changes["days"],
                itinerary.destination,
                itinerary.start_date,
                max_days=self.max_days,
                keep_ids=owned_ids,
            )
        if itinerary.end_date is not None:
            _check_date_order(itinerary.start_date, itinerary.end_date)

        itinerary.updated_at = utc_now()
        saved = await self.itineraries.save(itinerary)
        await self._set_current(saved.user_id, saved.id)
        return saved

    async def delete_itinerary(self, itinerary_id: str) -> None:
        """
        Raises:
            NotFoundError: If the itinerary does not exist
        """
        itinerary = await self.get_itinerary_by_id(itinerary_id)
        await self.itineraries.delete(itinerary_id)

        user = await self.users.get(itinerary.user_id)
        if user and user.current_itinerary_id == itinerary_id:
            await self._set_current(user.id, None)
        logger.info("Deleted itinerary %s", itinerary_id)

    async def update_item_status(self, item_id: str, status: str) -> ItineraryItem:
        """
        Set an item's status and return the updated item

        Transitions are assigned directly; any status may follow any other.
        Locating the item scans all itineraries (O(itineraries x days x items)).

        Raises:
            ValidationError: If status is not confirmed/pending/cancelled/none
            NotFoundError: If no itinerary contains the item
        """
        if status not in ITEM_STATUSES:
            raise ValidationError.for_fields(
                "Valid status is required",
                [{"field": "status", "message": f"Must be one of: {', '.join(ITEM_STATUSES)}"}],
            )

        itinerary = await self.get_itinerary_by_item_id(item_id)
        item = itinerary.find_item(item_id)
        item.status = status
        itinerary.updated_at = utc_now()

        await self.itineraries.save(itinerary)
        await self._set_current(itinerary.user_id, itinerary.id)
        return item
