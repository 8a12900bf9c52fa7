import datetime as dt

SECONDS_PER_DAY = 86400


def as_utc(d: dt.datetime) -> dt.datetime:
    # les datetimes naïves sont prises pour de l'UTC
    if d.tzinfo is None:
        return d.replace(tzinfo=dt.timezone.utc)
    return d.astimezone(dt.timezone.utc)


def iso_utc(d: dt.datetime) -> str:
    return as_utc(d).isoformat().replace("+00:00", "Z")


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)
