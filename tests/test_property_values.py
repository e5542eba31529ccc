"""
Unit tests for the single property value parsers.
"""

from datetime import datetime, timedelta, timezone

import pytest
from lxml import etree

from webdav_client.protocol import (
    ApplyTo,
    CalendarComponents,
    LockScope,
    PrincipalLockOwner,
    ResourceType,
    UriLockOwner,
)
from webdav_client.protocol import property_values as values


def xml(text: str):
    return etree.fromstring(
        '<root xmlns:D="DAV:" xmlns:C="urn:ietf:params:xml:ns:caldav">%s</root>' % text
    )[0]


class TestNeutralValues:
    """A missing property gives a neutral value"""

    def test_none_in(self):
        assert values.parse_string(None) is None
        assert values.parse_integer(None) is None
        assert values.parse_datetime(None) is None
        assert values.parse_resource_type(None) == ResourceType.OTHER
        assert values.parse_calendar_components(None) == CalendarComponents.NONE
        assert values.parse_lock_scope(None) is None
        assert values.parse_lock_depth(None) is None
        assert values.parse_lock_owner(None) is None
        assert values.parse_lock_timeout(None) is None


class TestScalarValues:
    """Strings, integers and dates"""

    def test_string(self):
        assert values.parse_string(xml("<D:displayname>Work</D:displayname>")) == "Work"
        assert values.parse_string(xml("<D:displayname/>")) == ""

    def test_integer(self):
        assert values.parse_integer(xml("<D:getcontentlength>42</D:getcontentlength>")) == 42
        assert values.parse_integer(xml("<D:getcontentlength> 7 </D:getcontentlength>")) == 7
        assert values.parse_integer(xml("<D:getcontentlength>4.2</D:getcontentlength>")) is None
        assert values.parse_integer(xml("<D:getcontentlength/>")) is None

    @pytest.mark.parametrize(
        "text,expected",
        [
            (
                "Mon, 12 Jan 1998 09:25:56 GMT",
                datetime(1998, 1, 12, 9, 25, 56, tzinfo=timezone.utc),
            ),
            (
                "1997-12-01T17:42:21-08:00",
                datetime(1997, 12, 1, 17, 42, 21, tzinfo=timezone(timedelta(hours=-8))),
            ),
            (
                "2024-03-05T10:00:00Z",
                datetime(2024, 3, 5, 10, 0, 0, tzinfo=timezone.utc),
            ),
        ],
    )
    def test_datetime(self, text, expected):
        element = xml("<D:creationdate>%s</D:creationdate>" % text)
        assert values.parse_datetime(element) == expected

    def test_bad_datetime(self):
        assert values.parse_datetime(xml("<D:creationdate>garbage</D:creationdate>")) is None
        assert values.parse_datetime(xml("<D:creationdate/>")) is None


class TestFlagValues:
    """Resource types and calendar components"""

    def test_resource_type(self):
        element = xml(
            "<D:resourcetype><D:collection/><C:calendar/></D:resourcetype>"
        )
        assert values.parse_resource_type(element) == (
            ResourceType.COLLECTION | ResourceType.CALENDAR
        )

    def test_scheduling_and_addressbook(self):
        element = xml(
            '<D:resourcetype xmlns:CR="urn:ietf:params:xml:ns:carddav">'
            "<C:schedule-inbox/><C:schedule-outbox/><CR:addressbook/></D:resourcetype>"
        )
        assert values.parse_resource_type(element) == (
            ResourceType.SCHEDULE_INBOX
            | ResourceType.SCHEDULE_OUTBOX
            | ResourceType.ADDRESSBOOK
        )

    def test_notification(self):
        element = xml(
            '<D:resourcetype xmlns:CS="http://calendarserver.org/ns/">'
            "<CS:notification/></D:resourcetype>"
        )
        assert values.parse_resource_type(element) == ResourceType.NOTIFICATION

    def test_unknown_and_miscased_resource_types(self):
        element = xml("<D:resourcetype><D:Collection/><D:principal/></D:resourcetype>")
        assert values.parse_resource_type(element) == ResourceType.OTHER

    def test_calendar_components(self):
        element = xml(
            "<C:supported-calendar-component-set>"
            '<C:comp name="VEVENT"/><C:comp name="VFREEBUSY"/>'
            '<C:comp name="VTIMEZONE"/><C:comp name="VJOURNAL"/>'
            "</C:supported-calendar-component-set>"
        )
        assert values.parse_calendar_components(element) == (
            CalendarComponents.VEVENT
            | CalendarComponents.VFREEBUSY
            | CalendarComponents.VTIMEZONE
        )

    def test_comp_in_other_namespace_is_ignored(self):
        element = xml(
            '<C:supported-calendar-component-set><D:comp name="VTODO"/>'
            "</C:supported-calendar-component-set>"
        )
        assert values.parse_calendar_components(element) == CalendarComponents.NONE


class TestLockValues:
    """Pieces of an activelock element"""

    def test_scope(self):
        assert values.parse_lock_scope(xml("<D:lockscope><D:shared/></D:lockscope>")) == (
            LockScope.SHARED
        )
        assert values.parse_lock_scope(
            xml("<D:lockscope><D:Exclusive/></D:lockscope>")
        ) == (LockScope.EXCLUSIVE)
        assert values.parse_lock_scope(xml("<D:lockscope/>")) is None

    def test_depth(self):
        assert values.parse_lock_depth(xml("<D:depth> 0 </D:depth>")) == (
            ApplyTo.Lock.RESOURCE_ONLY
        )
        for text in ("infinity", "Infinity", "1"):
            assert values.parse_lock_depth(xml("<D:depth>%s</D:depth>" % text)) == (
                ApplyTo.Lock.RESOURCE_AND_ALL_DESCENDANTS
            )

    def test_uri_owner(self):
        element = xml(
            "<D:owner><D:href> http://example.org/~ejw/contact.html </D:href></D:owner>"
        )
        assert values.parse_lock_owner(element) == UriLockOwner(
            "http://example.org/~ejw/contact.html"
        )

    def test_principal_owner(self):
        assert values.parse_lock_owner(xml("<D:owner>  tobias  </D:owner>")) == (
            PrincipalLockOwner("tobias")
        )
        assert values.parse_lock_owner(
            xml("<D:owner><D:href>/principals/tobias</D:href></D:owner>")
        ) == PrincipalLockOwner("/principals/tobias")

    def test_unparseable_href_owner(self):
        element = xml("<D:owner><D:href>http://[broken</D:href></D:owner>")
        assert values.parse_lock_owner(element) == PrincipalLockOwner("http://[broken")

    def test_empty_owner(self):
        assert values.parse_lock_owner(xml("<D:owner/>")) is None
        assert values.parse_lock_owner(xml("<D:owner>   </D:owner>")) is None

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Second-3600", timedelta(hours=1)),
            ("second-5", timedelta(seconds=5)),
            (" SECOND-0 ", timedelta(0)),
            ("Infinite", None),
            ("infinity", None),
            ("Second-abc", None),
            ("Second--5", None),
            ("garbage", None),
            ("Second-99999999999999999999", None),
            ("Second-²", None),
            ("Second-٣", None),
        ],
    )
    def test_timeout(self, text, expected):
        element = xml("<D:timeout>%s</D:timeout>" % text)
        assert values.parse_lock_timeout(element) == expected
