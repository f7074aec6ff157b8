"""ABOUTME: Composite validators that check whole inputs field by field
ABOUTME: Every field is checked and all failures are combined into one error, rather than stopping at the first"""

from dataclasses import dataclass, field

from planit.domain.categories import CategoryCatalogue
from planit.domain.errors import ErrorKind, PlanItError, combine
from planit.domain.polls import MAX_OPTIONS, MIN_OPTIONS
from planit.domain.result import Err, Ok, Result, collect_errors
from planit.domain.value_objects import (
    Category,
    Coordinates,
    DateFormat,
    Description,
    Email,
    EmailOrUsername,
    LocationType,
    Money,
    Name,
    Option,
    Password,
    PollDuration,
    Subcategory,
    Title,
    Username,
    Visibility,
)


@dataclass(frozen=True)
class EventInput:
    """Raw event fields, as received from a client."""

    title: str | None
    category: str | None
    date: str | None
    price: str | None
    description: str | None = None
    subcategory: str | None = None
    location_type: str | None = None
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    visibility: str | None = Visibility.PUBLIC.value
    end_date: str | None = None
    password: str | None = None


@dataclass(frozen=True)
class ValidatedEventInput:
    title: Title
    description: Description
    category: Category
    subcategory: Subcategory
    location_type: LocationType | None
    location: str | None
    coordinates: Coordinates
    visibility: Visibility
    date: DateFormat
    end_date: DateFormat
    price: Money
    password: str


@dataclass(frozen=True)
class UserRegisterInput:
    username: str | None
    name: str | None
    email: str | None
    password: str | None


@dataclass(frozen=True)
class ValidatedUserRegisterInput:
    username: Username
    name: Name
    email: Email
    password: Password


@dataclass(frozen=True)
class UserLoginInput:
    email_or_username: str | None
    password: str | None


@dataclass(frozen=True)
class ValidatedUserLoginInput:
    email_or_username: EmailOrUsername
    password: str


@dataclass(frozen=True)
class UserEditInput:
    name: str | None
    description: str | None = None
    interests: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ValidatedUserEditInput:
    name: Name
    description: str
    interests: list[Category]


@dataclass(frozen=True)
class PollInput:
    title: str | None
    options: list[str]
    duration: str | int | None


@dataclass(frozen=True)
class ValidatedPollInput:
    title: str
    options: list[Option]
    duration: PollDuration


def _non_text_errors(**fields: object) -> list[PlanItError]:
    """Fields carried through without a value object still have to be strings (or absent)."""
    return [
        PlanItError.of(ErrorKind.INVALID_VALUE, name)
        for name, value in fields.items()
        if value is not None and not isinstance(value, str)
    ]


def validate_event_input(event_input: EventInput, catalogue: CategoryCatalogue) -> Result[ValidatedEventInput, PlanItError]:
    title = Title.create(event_input.title)
    description = Description.create(event_input.description)
    category = Category.create(event_input.category, catalogue)
    subcategory = Subcategory.create(event_input.category, event_input.subcategory, catalogue)
    location_type = LocationType.parse(event_input.location_type)
    coordinates = Coordinates.create(event_input.latitude, event_input.longitude)
    visibility = Visibility.parse(event_input.visibility)
    date = DateFormat.create(event_input.date, "date")
    end_date = DateFormat.create(event_input.end_date, "endDate")
    price = Money.create(event_input.price)

    errors = collect_errors(
        title, description, category, subcategory, location_type, coordinates, visibility, date, end_date, price
    )
    errors.extend(_non_text_errors(location=event_input.location, password=event_input.password))
    if errors:
        return Err(combine(errors))

    return Ok(
        ValidatedEventInput(
            title=title.unwrap(),
            description=description.unwrap(),
            category=category.unwrap(),
            subcategory=subcategory.unwrap(),
            location_type=location_type.unwrap(),
            location=event_input.location or None,
            coordinates=coordinates.unwrap(),
            visibility=visibility.unwrap(),
            date=date.unwrap(),
            end_date=end_date.unwrap(),
            price=price.unwrap(),
            password=event_input.password or "",
        )
    )


def validate_user_register_input(
    register_input: UserRegisterInput,
) -> Result[ValidatedUserRegisterInput, PlanItError]:
    username = Username.create(register_input.username)
    name = Name.create(register_input.name)
    email = Email.create(register_input.email)
    password = Password.create(register_input.password)

    errors = collect_errors(username, name, email, password)
    if errors:
        return Err(combine(errors))
    return Ok(
        ValidatedUserRegisterInput(
            username=username.unwrap(),
            name=name.unwrap(),
            email=email.unwrap(),
            password=password.unwrap(),
        )
    )


def validate_user_login_input(login_input: UserLoginInput) -> Result[ValidatedUserLoginInput, PlanItError]:
    """Validate login credentials.

    Only the identifier is checked for shape. The password just has to be present,
    strength rules apply at registration and would leak nothing useful here.
    """
    email_or_username = EmailOrUsername.create(login_input.email_or_username)
    errors = collect_errors(email_or_username)
    errors.extend(_non_text_errors(password=login_input.password))
    if login_input.password in (None, ""):
        errors.append(PlanItError.of(ErrorKind.VALUE_IS_BLANK, "password"))
    if errors:
        return Err(combine(errors))
    return Ok(ValidatedUserLoginInput(email_or_username=email_or_username.unwrap(), password=login_input.password))  # type: ignore[arg-type]


def validate_user_edit_input(
    edit_input: UserEditInput, catalogue: CategoryCatalogue
) -> Result[ValidatedUserEditInput, PlanItError]:
    errors = _non_text_errors(description=edit_input.description)
    lowered = [interest.strip().lower() for interest in edit_input.interests if isinstance(interest, str)]
    if len(set(lowered)) != len(lowered):
        errors.append(PlanItError.of(ErrorKind.INTERESTS_ARE_DUPLICATED, "interests"))

    name = Name.create(edit_input.name)
    interests = [Category.create(interest, catalogue) for interest in edit_input.interests]
    errors.extend(collect_errors(name, *interests))
    if errors:
        return Err(combine(errors))
    return Ok(
        ValidatedUserEditInput(
            name=name.unwrap(),
            description=edit_input.description or "",
            interests=[interest.unwrap() for interest in interests],
        )
    )


def validate_poll_input(poll_input: PollInput) -> Result[ValidatedPollInput, PlanItError]:
    errors = _non_text_errors(title=poll_input.title)
    if not errors and (poll_input.title is None or not poll_input.title.strip()):
        errors.append(PlanItError.of(ErrorKind.VALUE_IS_BLANK, "title"))
    if not MIN_OPTIONS <= len(poll_input.options) <= MAX_OPTIONS:
        errors.append(PlanItError.of(ErrorKind.INVALID_NUMBER_OF_OPTIONS, "options"))

    options = [Option.create(option) for option in poll_input.options]
    duration = PollDuration.create(poll_input.duration)
    errors.extend(collect_errors(*options, duration))
    if errors:
        return Err(combine(errors))
    return Ok(
        ValidatedPollInput(
            title=poll_input.title,  # type: ignore[arg-type]
            options=[option.unwrap() for option in options],
            duration=duration.unwrap(),
        )
    )
