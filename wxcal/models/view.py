"""Serializable view state: everything the calendar presentation derives from."""

from datetime import date

from pydantic import BaseModel, Field

from wxcal.calendar.grid import MAX_YEAR, MIN_YEAR, shift_month


class ViewState(BaseModel):
    """Displayed month, committed city, and the selected day (if any).

    Immutable; every transition returns a new instance.
    """

    model_config = {"extra": "forbid", "frozen": True}

    year: int = Field(ge=MIN_YEAR, le=MAX_YEAR)
    month: int = Field(ge=1, le=12)
    city: str = ""
    selected_date: date | None = None

    @classmethod
    def for_today(cls, today: date, city: str = "") -> "ViewState":
        return cls(year=today.year, month=today.month, city=city.strip())

    def with_month_offset(self, delta: int) -> "ViewState":
        """Raises ValidationError when the move leaves the supported years."""
        year, month = shift_month(self.year, self.month, delta)
        return self.model_validate({**self.model_dump(), "year": year, "month": month})

    def with_city(self, text: str) -> "ViewState":
        """Commit search text as the city. Selection belongs to the old city."""
        return self.model_copy(update={"city": text.strip(), "selected_date": None})

    def select(self, day: date) -> "ViewState":
        return self.model_copy(update={"selected_date": day})

    def clear_selection(self) -> "ViewState":
        return self.model_copy(update={"selected_date": None})

    def to_query(self) -> dict[str, str]:
        """Flatten to URL query parameters."""
        params = {"city": self.city, "year": str(self.year), "month": str(self.month)}
        if self.selected_date is not None:
            params["date"] = self.selected_date.isoformat()
        return params
