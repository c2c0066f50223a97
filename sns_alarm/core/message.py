"""Turn alert check results into SMS-safe notices and classify recipients."""

from __future__ import annotations

from sns_alarm.core.models import MAX_MSG_LENGTH, CheckResult, Recipient

PHONE_PREFIX = "+"


def build_message(result: CheckResult) -> str:
    """Return the result description cut to MAX_MSG_LENGTH UTF-16 code units.

    No prefix, suffix or templating is added. Lone surrogates in the
    description are carried through as is. A surrogate pair split by the cut
    loses its dangling high half, so the message stays a prefix of the
    description.
    """
    description = result.result_description
    encoded = description.encode("utf-16-le", errors="surrogatepass")
    if len(encoded) <= MAX_MSG_LENGTH * 2:
        return description
    message = encoded[: MAX_MSG_LENGTH * 2].decode("utf-16-le", errors="surrogatepass")
    if message and "\ud800" <= message[-1] <= "\udbff":
        message = message[:-1]
    return message


def classify_recipient(to: str) -> Recipient:
    """Classify ``to`` as a phone number (leading '+') or an SNS topic name.

    Neither E.164 syntax nor topic names are validated here; SNS reports those.
    """
    if to.startswith(PHONE_PREFIX):
        return Recipient(kind="phone", value=to)
    return Recipient(kind="topic", value=to)
