from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional, Union


class ServiceSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, coerce_numbers_to_str=True)

    service_id: Optional[str] = Field(None, alias="serviceId")
    service_name: Optional[str] = Field(None, alias="serviceName")
    no_of_providers: Optional[int] = Field(None, alias="noOfProviders")


class ProviderProfile(BaseModel):
    """A provider record as returned by ``/auth/get-profile/{username}``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, coerce_numbers_to_str=True)

    username: str
    provider_name: Optional[str] = Field(None, alias="providerName")
    profile_picture: Optional[str] = Field(None, alias="profilePicture")
    rating: Optional[float] = Field(None, ge=0, le=5)
    # may arrive as a string or a serialized blob; not rendered
    description: Any = None
    location: Optional[str] = None
    mobile_number: Optional[str] = Field(None, alias="mobileNumber")
    email: Optional[str] = None
    experience: Optional[Union[int, float]] = None
    no_of_bookings: Optional[int] = Field(None, alias="noOfBookings")
    no_of_times_booked: Optional[int] = Field(None, alias="noOfTimesBooked")
    service: Optional[ServiceSummary] = None

    @property
    def display_name(self) -> str:
        return self.provider_name or self.username

    @property
    def initial(self) -> str:
        return self.provider_name[0] if self.provider_name else "P"

    @property
    def picture_uri(self) -> Optional[str]:
        if not self.profile_picture:
            return None
        return f"data:image/jpeg;base64,{self.profile_picture}"


class SearchFilters(BaseModel):
    search: str = ""
    location: str = ""


class SessionUser(BaseModel):
    username: str
    role: str
    token: Optional[str] = None


class AuthSession(BaseModel):
    is_authenticated: bool = False
    user: Optional[SessionUser] = None


class BookingRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider_username: str = Field(alias="providerUsername")
    service_id: Optional[str] = Field(None, alias="serviceId")
    booking_date: str = Field(alias="bookingDate", min_length=1)
    address: str = Field(min_length=1)
    notes: Optional[str] = None
