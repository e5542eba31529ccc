"""
Unit tests for the multistatus and lock response parsers.

All tests are pure - they parse canned XML responses.
"""

import logging
from datetime import datetime, timedelta, timezone

from lxml import etree

from webdav_client.protocol import (
    ApplyTo,
    CalendarComponents,
    LockScope,
    PrincipalLockOwner,
    ResourceType,
    UriLockOwner,
    parse_lock_response,
    parse_mkcalendar_response,
    parse_mkcol_extended_response,
    parse_propfind_response,
    parse_proppatch_response,
    parse_report_response,
)
from webdav_client.protocol.xml_parsers import inner_xml, status_to_code, try_parse_xml

CALDAV = "urn:ietf:params:xml:ns:caldav"

TWO_PROPSTATS = b"""<?xml version="1.0" encoding="utf-8"?>
<D:multistatus xmlns:D="DAV:">
  <D:response>
    <D:href>/files/report.txt</D:href>
    <D:propstat>
      <D:prop><D:displayname>Report</D:displayname></D:prop>
      <D:status>HTTP/1.1 200 OK</D:status>
    </D:propstat>
    <D:propstat>
      <D:prop><D:getcontentlength/></D:prop>
      <D:status>HTTP/1.1 404 Not Found</D:status>
    </D:propstat>
  </D:response>
</D:multistatus>"""

FULL_RESOURCE = b"""<?xml version="1.0" encoding="utf-8"?>
<multistatus xmlns="DAV:" xmlns:C="urn:ietf:params:xml:ns:caldav">
  <response>
    <href>/calendars/tobias/work</href>
    <propstat>
      <prop>
        <resourcetype><collection/><C:calendar/></resourcetype>
        <C:supported-calendar-component-set><C:comp name="VEVENT"/><C:comp name="VJOURNAL"/><C:comp name="VTODO"/></C:supported-calendar-component-set>
        <displayname>Work</displayname>
        <getcontenttype>text/calendar</getcontenttype>
        <getcontentlanguage>en</getcontentlanguage>
        <getcontentlength>1024</getcontentlength>
        <creationdate>1997-12-01T17:42:21-08:00</creationdate>
        <getlastmodified>Mon, 12 Jan 1998 09:25:56 GMT</getlastmodified>
        <getetag>"abc-123"</getetag>
        <ishidden>1</ishidden>
      </prop>
      <status>HTTP/1.1 200 OK</status>
    </propstat>
  </response>
</multistatus>"""

LOCK_DISCOVERY = b"""<?xml version="1.0" encoding="utf-8"?>
<D:prop xmlns:D="DAV:">
  <D:lockdiscovery>
    <D:activelock>
      <D:locktype><D:write/></D:locktype>
      <D:lockscope><D:exclusive/></D:lockscope>
      <D:depth>infinity</D:depth>
      <D:owner><D:href>http://example.org/~ejw/contact.html</D:href></D:owner>
      <D:timeout>Second-604800</D:timeout>
      <D:locktoken><D:href>urn:uuid:e71d4fae-5dec-22d6-fea5-00a0c91e6be4</D:href></D:locktoken>
      <D:lockroot><D:href>http://example.com/workspace/webdav/proposal.doc</D:href></D:lockroot>
    </D:activelock>
  </D:lockdiscovery>
</D:prop>"""


class TestParsingHelpers:
    """Status lines, raw XML and property values"""

    def test_status_to_code(self):
        assert status_to_code("HTTP/1.1 200 OK") == 200
        assert status_to_code("HTTP/1.1 424 Failed Dependency") == 424
        assert status_to_code("  HTTP/1.1 404  ") == 404
        assert status_to_code("HTTP/1.1 200") == 200

    def test_unparseable_status_is_zero(self):
        assert status_to_code(None) == 0
        assert status_to_code("") == 0
        assert status_to_code("garbage") == 0
        assert status_to_code("HTTP/1.1 OK") == 0

    def test_try_parse_xml(self):
        assert try_parse_xml(b"<a/>").ok
        assert try_parse_xml('<?xml version="1.0" encoding="utf-8"?><a/>').ok
        for body in (None, b"", "", b"<a>", b"not xml at all"):
            document = try_parse_xml(body)
            assert not document.ok
            assert document.error

    def test_no_external_entities(self):
        body = b"""<?xml version="1.0"?>
<!DOCTYPE a [<!ENTITY secret SYSTEM "file:///etc/passwd">]>
<a>&secret;</a>"""
        document = try_parse_xml(body)
        if document.ok:
            assert "root:" not in "".join(document.root.itertext())

    def test_inner_xml(self):
        element = etree.fromstring(
            b'<D:p xmlns:D="DAV:">a &amp; b<D:href>x</D:href>tail</D:p>'
        )
        value = inner_xml(element)
        assert value.startswith("a &amp; b<D:href")
        assert value.endswith(">x</D:href>tail")

    def test_inner_xml_of_empty_element(self):
        assert inner_xml(etree.fromstring(b"<a/>")) == ""


class TestPropfindParser:
    """PROPFIND multistatus parsing"""

    def test_two_propstats(self):
        response = parse_propfind_response(TWO_PROPSTATS, 207, "Multi-Status")
        assert response.status_code == 207
        assert response.description == "Multi-Status"
        assert response.ok
        assert len(response.resources) == 1
        resource = response.resources[0]
        assert resource.uri == "/files/report.txt"
        assert not resource.is_collection
        assert resource.display_name == "Report"
        assert resource.content_length is None
        assert [(s.name.text, s.status_code) for s in resource.property_statuses] == [
            ("{DAV:}displayname", 200),
            ("{DAV:}getcontentlength", 404),
        ]
        assert [p.name.text for p in resource.properties] == [
            "{DAV:}displayname",
            "{DAV:}getcontentlength",
        ]
        assert resource.properties[0].value == "Report"
        assert resource.properties[1].value == ""

    def test_all_standard_properties(self):
        response = parse_propfind_response(FULL_RESOURCE)
        resource = response.resources[0]
        assert resource.uri == "/calendars/tobias/work/"
        assert resource.is_collection
        assert resource.is_hidden
        assert resource.resource_type == ResourceType.COLLECTION | ResourceType.CALENDAR
        assert resource.calendar_components == (
            CalendarComponents.VEVENT | CalendarComponents.VTODO
        )
        assert resource.display_name == "Work"
        assert resource.content_type == "text/calendar"
        assert resource.content_language == "en"
        assert resource.content_length == 1024
        assert resource.creation_date == datetime(
            1997, 12, 1, 17, 42, 21, tzinfo=timezone(timedelta(hours=-8))
        )
        assert resource.last_modified_date == datetime(
            1998, 1, 12, 9, 25, 56, tzinfo=timezone.utc
        )
        assert resource.etag == '"abc-123"'
        assert all(s.status_code == 200 for s in resource.property_statuses)
        assert resource.active_locks == ()

    def test_collection_uri_gets_one_trailing_slash(self):
        body = b"""<D:multistatus xmlns:D="DAV:">
<D:response><D:href>/a/b//</D:href><D:propstat><D:prop><D:resourcetype><D:collection/></D:resourcetype></D:prop><D:status>HTTP/1.1 200 OK</D:status></D:propstat></D:response>
<D:response><D:href>/a/c</D:href><D:propstat><D:prop><D:iscollection>1</D:iscollection></D:prop><D:status>HTTP/1.1 200 OK</D:status></D:propstat></D:response>
<D:response><D:href>/a/d.txt</D:href><D:propstat><D:prop><D:resourcetype/></D:prop><D:status>HTTP/1.1 200 OK</D:status></D:propstat></D:response>
</D:multistatus>"""
        resources = parse_propfind_response(body).resources
        assert [r.uri for r in resources] == ["/a/b/", "/a/c/", "/a/d.txt"]
        assert [r.is_collection for r in resources] == [True, True, False]
        assert resources[1].resource_type == ResourceType.OTHER

    def test_resource_type_is_case_sensitive(self):
        body = b"""<D:multistatus xmlns:D="DAV:"><D:response><D:href>/x</D:href>
<D:propstat><D:prop><D:resourcetype><D:Collection/></D:resourcetype></D:prop>
<D:status>HTTP/1.1 200 OK</D:status></D:propstat></D:response></D:multistatus>"""
        resource = parse_propfind_response(body).resources[0]
        assert resource.resource_type == ResourceType.OTHER
        assert not resource.is_collection

    def test_document_order(self):
        body = b"""<D:multistatus xmlns:D="DAV:">
<D:response><D:href>/z</D:href></D:response>
<D:response><D:href>/a</D:href></D:response>
<D:response><D:href>/m</D:href></D:response>
</D:multistatus>"""
        assert [r.uri for r in parse_propfind_response(body).resources] == [
            "/z",
            "/a",
            "/m",
        ]

    def test_unparseable_values_are_none(self):
        body = b"""<D:multistatus xmlns:D="DAV:"><D:response><D:href>/x</D:href>
<D:propstat><D:prop>
<D:getcontentlength>lots</D:getcontentlength>
<D:getlastmodified>garbage</D:getlastmodified>
</D:prop><D:status>HTTP/1.1 200 OK</D:status></D:propstat></D:response></D:multistatus>"""
        resource = parse_propfind_response(body).resources[0]
        assert resource.content_length is None
        assert resource.last_modified_date is None

    def test_lone_response_element(self):
        body = b"""<D:response xmlns:D="DAV:"><D:href>/lonely</D:href>
<D:propstat><D:prop><D:displayname>Lonely</D:displayname></D:prop>
<D:status>HTTP/1.1 200 OK</D:status></D:propstat></D:response>"""
        resources = parse_propfind_response(body).resources
        assert [r.display_name for r in resources] == ["Lonely"]

    def test_lock_discovery_property(self):
        body = b"""<D:multistatus xmlns:D="DAV:"><D:response><D:href>/doc</D:href>
<D:propstat><D:prop><D:lockdiscovery><D:activelock>
<D:lockscope><D:shared/></D:lockscope><D:depth>0</D:depth>
<D:owner>tobias</D:owner><D:timeout>Infinite</D:timeout>
<D:locktoken><D:href>opaquelocktoken:1234</D:href></D:locktoken>
</D:activelock></D:lockdiscovery></D:prop>
<D:status>HTTP/1.1 200 OK</D:status></D:propstat></D:response></D:multistatus>"""
        resource = parse_propfind_response(body).resources[0]
        (lock,) = resource.active_locks
        assert lock.scope == LockScope.SHARED
        assert lock.depth == ApplyTo.Lock.RESOURCE_ONLY
        assert lock.owner == PrincipalLockOwner("tobias")
        assert lock.timeout is None
        assert lock.token == "opaquelocktoken:1234"
        assert lock.lock_root is None

    def test_unparseable_owner_href(self):
        body = b"""<D:multistatus xmlns:D="DAV:"><D:response><D:href>/doc</D:href>
<D:propstat><D:prop><D:displayname>A</D:displayname><D:lockdiscovery><D:activelock>
<D:lockscope><D:exclusive/></D:lockscope><D:depth>0</D:depth>
<D:owner><D:href>http://[broken</D:href></D:owner>
</D:activelock></D:lockdiscovery></D:prop>
<D:status>HTTP/1.1 200 OK</D:status></D:propstat></D:response></D:multistatus>"""
        resources = parse_propfind_response(body, 207).resources
        assert resources[0].display_name == "A"
        assert resources[0].active_locks[0].owner == PrincipalLockOwner("http://[broken")

    def test_missing_href(self, caplog):
        body = b"""<D:multistatus xmlns:D="DAV:"><D:response>
<D:propstat><D:prop><D:displayname>x</D:displayname></D:prop>
<D:status>HTTP/1.1 200 OK</D:status></D:propstat></D:response></D:multistatus>"""
        with caplog.at_level(logging.WARNING, logger="webdav_client"):
            resources = parse_propfind_response(body).resources
        assert resources[0].uri == ""
        assert "without href" in caplog.text

    def test_malformed_body_gives_status_only(self):
        for body in (b"", None, b"<D:multistatus xmlns:D='DAV:'><D:response>"):
            response = parse_propfind_response(body, 500, "Internal Server Error")
            assert response.status_code == 500
            assert response.description == "Internal Server Error"
            assert response.resources == ()
            assert not response.ok

    def test_parsing_is_idempotent(self):
        assert parse_propfind_response(FULL_RESOURCE) == parse_propfind_response(
            FULL_RESOURCE
        )

    def test_text_body(self):
        response = parse_propfind_response(TWO_PROPSTATS.decode("utf-8"))
        assert response.resources[0].display_name == "Report"


class TestReportParser:
    """multiget REPORT parsing"""

    def test_calendar_data(self):
        body = b"""<?xml version="1.0" encoding="utf-8"?>
<D:multistatus xmlns:D="DAV:" xmlns:C="urn:ietf:params:xml:ns:caldav">
<D:response><D:href>/cal/1.ics</D:href><D:propstat><D:prop>
<D:getetag>"1"</D:getetag><C:calendar-data>BEGIN:VCALENDAR
END:VCALENDAR
</C:calendar-data></D:prop><D:status>HTTP/1.1 200 OK</D:status></D:propstat></D:response>
<D:response><D:href>/cal/2.ics</D:href><D:status>HTTP/1.1 404 Not Found</D:status></D:response>
</D:multistatus>"""
        response = parse_report_response(body, 207)
        assert [r.uri for r in response.resources] == ["/cal/1.ics", "/cal/2.ics"]
        first = response.resources[0]
        assert first.etag == '"1"'
        data = [p.value for p in first.properties if p.name.text == "{%s}calendar-data" % CALDAV]
        assert data == ["BEGIN:VCALENDAR\nEND:VCALENDAR\n"]
        assert response.resources[1].properties == ()

    def test_malformed(self):
        response = parse_report_response(b"<oops", 502, "Bad Gateway")
        assert response.resources == ()
        assert response.status_code == 502


class TestPropertyStatusParsers:
    """PROPPATCH, MKCALENDAR and extended MKCOL responses"""

    body = b"""<D:multistatus xmlns:D="DAV:" xmlns:E="http://example.com/ns">
<D:response><D:href>/cal/</D:href>
<D:propstat><D:prop><D:displayname/></D:prop><D:status>HTTP/1.1 424 Failed Dependency</D:status></D:propstat>
<D:propstat><D:prop><E:color/></D:prop><D:status>HTTP/1.1 403 Forbidden</D:status>
<D:responsedescription>read only</D:responsedescription></D:propstat>
</D:response>
<D:response><D:href>/other/</D:href>
<D:propstat><D:prop><D:getcontentlanguage/></D:prop><D:status>HTTP/1.1 200 OK</D:status></D:propstat>
</D:response>
</D:multistatus>"""

    def test_proppatch_statuses_across_responses(self):
        response = parse_proppatch_response(self.body, 207, "Multi-Status")
        assert [(s.name.text, s.status_code, s.description) for s in response.property_statuses] == [
            ("{DAV:}displayname", 424, None),
            ("{http://example.com/ns}color", 403, "read only"),
            ("{DAV:}getcontentlanguage", 200, None),
        ]

    def test_mkcalendar(self):
        response = parse_mkcalendar_response(self.body, 207)
        assert len(response.property_statuses) == 3
        assert parse_mkcalendar_response(b"", 201, "Created") == (
            parse_mkcalendar_response(None, 201, "Created")
        )
        assert parse_mkcalendar_response(b"", 201).property_statuses == ()
        broken = parse_mkcalendar_response(b"<oops", 403, "Forbidden")
        assert broken.status_code == 403
        assert broken.property_statuses == ()
        assert not broken.ok

    def test_mkcol_extended(self):
        response = parse_mkcol_extended_response(self.body, 207)
        assert response.property_statuses[1].status_code == 403
        created = parse_mkcol_extended_response(None, 201, "Created")
        assert created.ok
        assert created.property_statuses == ()
        broken = parse_mkcol_extended_response(b"<oops", 207)
        assert broken.status_code == 207
        assert broken.property_statuses == ()


class TestLockParser:
    """LOCK response parsing"""

    def test_lock_discovery(self):
        response = parse_lock_response(LOCK_DISCOVERY, 200, "OK")
        (lock,) = response.active_locks
        assert lock.scope == LockScope.EXCLUSIVE
        assert lock.depth == ApplyTo.Lock.RESOURCE_AND_ALL_DESCENDANTS
        assert lock.owner == UriLockOwner("http://example.org/~ejw/contact.html")
        assert lock.timeout == timedelta(seconds=604800)
        assert lock.token == "urn:uuid:e71d4fae-5dec-22d6-fea5-00a0c91e6be4"
        assert lock.lock_root == "http://example.com/workspace/webdav/proposal.doc"

    def test_no_lockdiscovery(self):
        response = parse_lock_response(b'<D:prop xmlns:D="DAV:"/>', 200)
        assert response.active_locks == ()

    def test_unparseable_owner_and_timeout(self):
        body = LOCK_DISCOVERY.replace(
            b"http://example.org/~ejw/contact.html", b"http://[broken"
        ).replace(b"Second-604800", "Second-\u00b2".encode("utf-8"))
        (lock,) = parse_lock_response(body, 200, "OK").active_locks
        assert lock.owner == PrincipalLockOwner("http://[broken")
        assert lock.timeout is None
        assert lock.token == "urn:uuid:e71d4fae-5dec-22d6-fea5-00a0c91e6be4"

    def test_malformed(self):
        response = parse_lock_response(b"<D:prop", 423, "Locked")
        assert response.status_code == 423
        assert response.description == "Locked"
        assert response.active_locks == ()
