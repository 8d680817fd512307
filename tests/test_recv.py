"""Tests for response combinators."""

from datetime import datetime, timezone

import pytest
from pydantic import BaseModel

from httpcat import GET, NoMatch, Ref, StatusCode, Undefined, recv, send
from httpcat.http import status

JSON = {"Content-Type": "application/json"}


class Site(BaseModel):
    site: str


SITES = [
    "q.example.com",
    "a.example.com",
    "z.example.com",
    "w.example.com",
    "s.example.com",
    "x.example.com",
    "e.example.com",
    "d.example.com",
    "c.example.com",
]


def get(*arrows):
    return GET(send.uri("https://example.com/site"), *arrows)


class TestStatus:
    """Tests for status code assertions."""

    def test_ok(self, json_stack):
        stack, _ = json_stack
        assert stack.io(get(recv.status.ok)) is None

    def test_mismatch_is_status_code(self, make_stack):
        stack, _ = make_stack(404)
        err = stack.io(get(recv.status.ok))
        assert isinstance(err, StatusCode)
        assert err == status.NOT_FOUND
        assert err.required == 200
        assert str(err) == "HTTP Status `404 Not Found`, required `200 OK`."

    def test_code_accepts_any_listed(self, make_stack):
        stack, _ = make_stack(202)
        assert stack.io(get(recv.code(status.OK, status.ACCEPTED))) is None

    def test_code_mismatch_uses_first_code(self, make_stack):
        stack, _ = make_stack(500)
        err = stack.io(get(recv.code(201, 202)))
        assert err == 500
        assert err.required == 201

    def test_code_requires_argument(self):
        with pytest.raises(ValueError):
            recv.code()

    def test_status_without_request(self, make_stack):
        stack, socket = make_stack()
        err = stack.io(GET(recv.status.ok))
        assert err is not None
        assert socket.requests == []


class TestHeaders:
    """Tests for response header assertions."""

    @pytest.fixture
    def stack(self, make_stack):
        stack, _ = make_stack(
            200,
            {
                "Content-Type": "application/json; charset=utf-8",
                "ETag": '"v1"',
                "Age": "42",
                "Last-Modified": "Mon, 02 Jan 2023 15:04:05 GMT",
                "Transfer-Encoding": "chunked",
            },
            "{}",
        )
        return stack

    def test_prefix_match(self, stack):
        assert stack.io(get(recv.content_type.json)) is None
        assert stack.io(get(recv.content_type.is_("application/json; charset=utf-8"))) is None
        assert stack.io(get(recv.transfer_encoding.chunked)) is None

    def test_value_mismatch(self, stack):
        err = stack.io(get(recv.content_type.html))
        assert isinstance(err, NoMatch)
        assert err.expect == "text/html"
        assert err.actual == "application/json; charset=utf-8"
        assert err.diff == "+ Content-Type: application/json; charset=utf-8\n- Content-Type: text/html"

    def test_wildcard(self, stack):
        assert stack.io(get(recv.header("ETag", "*"))) is None
        assert stack.io(get(recv.etag.any)) is None

    def test_wildcard_absent(self, stack):
        err = stack.io(get(recv.header("X-Missing", "*")))
        assert isinstance(err, NoMatch)
        assert err.actual is None

    def test_absent_distinct_from_mismatch(self, stack):
        absent = stack.io(get(recv.location.is_("/next")))
        mismatch = stack.io(get(recv.etag.is_('"v2"')))
        assert absent.actual is None
        assert mismatch.actual == '"v1"'

    def test_int_value(self, stack):
        assert stack.io(get(recv.age.is_(42))) is None

    def test_lift_string(self, stack):
        etag = Ref(str)
        assert stack.io(get(recv.etag.to(etag))) is None
        assert etag.value == '"v1"'

    def test_lift_int(self, stack):
        age = Ref(int)
        assert stack.io(get(recv.header("Age", age))) is None
        assert age.value == 42

    def test_lift_datetime(self, stack):
        modified = Ref(datetime)
        assert stack.io(get(recv.last_modified.to(modified))) is None
        assert modified.value == datetime(2023, 1, 2, 15, 4, 5, tzinfo=timezone.utc)

    def test_lift_int_invalid(self, stack):
        etag = Ref(int)
        assert isinstance(stack.io(get(recv.etag.to(etag))), ValueError)

    def test_lift_absent(self, stack):
        link = Ref(str)
        err = stack.io(get(recv.link.to(link)))
        assert isinstance(err, NoMatch)
        assert link.value is None


class TestBody:
    """Tests for body decoding."""

    def test_decode_typed(self, json_stack):
        """Status, content type and typed decode of a JSON document."""
        stack, socket = json_stack
        site = Ref(Site)
        err = stack.io(
            get(
                recv.status.ok,
                recv.content_type.json,
                recv.body(site),
            )
        )
        assert err is None
        assert site.value.site == "example.com"
        assert len(socket.requests) == 1

    def test_recv_alias(self, json_stack):
        stack, _ = json_stack
        data = Ref()
        assert stack.io(get(recv.recv(data))) is None
        assert data.value == {"site": "example.com"}

    def test_form(self, make_stack):
        stack, _ = make_stack(200, {"Content-Type": "application/x-www-form-urlencoded"}, "site=example.com")
        site = Ref(Site)
        assert stack.io(get(recv.body(site))) is None
        assert site.value == Site(site="example.com")

    def test_unsupported_content_type(self, make_stack):
        stack, socket = make_stack(200, {"Content-Type": "text/plain"}, "hello")
        err = stack.io(get(recv.body(Ref(Site))))
        assert isinstance(err, NoMatch)
        assert err.protocol == "codec"
        assert err.actual == "text/plain"
        assert socket.responses[0].raw.drained

    def test_decode_error(self, make_stack):
        stack, _ = make_stack(200, JSON, "{broken")
        err = stack.io(get(recv.body(Ref(Site))))
        assert isinstance(err, ValueError)

    def test_raw(self, make_stack):
        stack, _ = make_stack(200, {"Content-Type": "image/png"}, b"\x89PNG")
        data = Ref(bytes)
        assert stack.io(get(recv.status.ok, recv.raw(data))) is None
        assert data.value == b"\x89PNG"

    def test_discard(self, json_stack):
        stack, socket = json_stack
        ctx = stack.with_context()
        assert get(recv.discard)(ctx) is None
        assert ctx.consumed
        assert socket.responses[0].raw.drained

    def test_headers_after_body(self, json_stack):
        stack, _ = json_stack
        site = Ref(Site)
        assert stack.io(get(recv.body(site), recv.content_type.json, recv.status.ok)) is None

    def test_body_after_discard(self, json_stack):
        stack, socket = json_stack
        err = stack.io(get(recv.discard, recv.body(Ref())))
        assert isinstance(err, NoMatch)
        assert err.id == "http.Recv"
        assert err.protocol == "body"
        assert socket.responses[0].raw.drained

    def test_raw_after_discard(self, json_stack):
        stack, _ = json_stack
        assert isinstance(stack.io(get(recv.discard, recv.raw(Ref(bytes)))), NoMatch)

    def test_body_after_discard_with_memento(self, make_stack):
        stack, _ = make_stack(200, JSON, '{"site":"example.com"}', memento=True)
        site = Ref(Site)
        assert stack.io(get(recv.discard, recv.body(site))) is None
        assert site.value == Site(site="example.com")


class TestExpect:
    """Tests for structural equality."""

    def test_equal(self, json_stack):
        stack, _ = json_stack
        assert stack.io(get(recv.expect(Site(site="example.com")))) is None

    def test_mismatch(self, json_stack):
        stack, _ = json_stack
        err = stack.io(get(recv.expect(Site(site="example.org"))))
        assert isinstance(err, NoMatch)
        assert err.protocol == "body"
        assert err.actual == Site(site="example.com")
        assert '-  "site": "example.org"' in err.diff
        assert '+  "site": "example.com"' in err.diff

    def test_dict(self, json_stack):
        stack, _ = json_stack
        assert stack.io(get(recv.expect({"site": "example.com"}))) is None

    def test_list_of_models(self, make_stack):
        stack, _ = make_stack(200, JSON, '[{"site":"a.example.com"}]')
        assert stack.io(get(recv.expect([Site(site="a.example.com")]))) is None

    def test_list_of_models_mismatch(self, make_stack):
        stack, _ = make_stack(200, JSON, '[{"site":"a.example.com"}]')
        err = stack.io(get(recv.expect([Site(site="b.example.com")])))
        assert isinstance(err, NoMatch)
        assert '+    "site": "a.example.com"' in err.diff

    def test_dict_of_models(self, make_stack):
        stack, _ = make_stack(200, JSON, '{"main":{"site":"example.com"}}')
        assert stack.io(get(recv.expect({"main": Site(site="example.com")}))) is None

    def test_explicit_target_type(self, make_stack):
        stack, _ = make_stack(200, JSON, '[{"site":"a.example.com"}]')
        sites = [Site(site="a.example.com")]
        assert stack.io(get(recv.expect(sites, into=list[Site]))) is None


class TestMatch:
    """Tests for JSON pattern matching."""

    @pytest.fixture
    def stack(self, make_stack):
        body = '{"site":"example.com","tags":["a","b"],"rank":1,"open":true,"owner":null,"meta":{"v":2}}'
        stack, _ = make_stack(200, JSON, body)
        return stack

    @pytest.mark.parametrize(
        "pattern",
        [
            '{"site": "example.com"}',
            '{"site": "_"}',
            '{"tags": ["a", "_"]}',
            '{"rank": 1, "open": true}',
            '{"owner": null}',
            '{"meta": {"v": 2}}',
            '"_"',
        ],
    )
    def test_matches(self, stack, pattern):
        assert stack.io(get(recv.match(pattern))) is None

    @pytest.mark.parametrize(
        "pattern",
        [
            '{"site": "example.org"}',
            '{"tags": ["a"]}',
            '{"missing": "_"}',
            '{"rank": "1"}',
            '{"open": 1}',
            '{"meta": {"v": 3}}',
        ],
    )
    def test_no_match(self, stack, pattern):
        err = stack.io(get(recv.match(pattern)))
        assert isinstance(err, NoMatch)
        assert err.id == "http.Match"

    def test_invalid_pattern(self):
        with pytest.raises(ValueError):
            recv.match("{not json")


class TestSeq:
    """Tests for sequence membership."""

    @pytest.fixture
    def sites(self, make_stack):
        body = "[" + ",".join(f'{{"site":"{s}"}}' for s in SITES) + "]"
        stack, _ = make_stack(200, JSON, body)
        return stack

    def test_has(self, sites):
        seq = Ref(list[Site])
        err = sites.io(
            get(
                recv.body(seq),
                recv.seq(seq, key="site").has("s.example.com"),
                recv.seq(seq, key="site").has("s.example.com", Site(site="s.example.com")),
                recv.seq(seq, key="site").has("z.example.com", Site(site="z.example.com")),
            )
        )
        assert err is None
        assert len(seq.value) == 9

    def test_not_found(self, sites):
        seq = Ref(list[Site])
        err = sites.io(get(recv.body(seq), recv.seq(seq, key="site").has("0.example.com")))
        assert isinstance(err, Undefined)
        assert err.key == "0.example.com"

    def test_value_mismatch(self, sites):
        seq = Ref(list[Site])
        err = sites.io(
            get(recv.body(seq), recv.seq(seq, key="site").has("s.example.com", Site(site="z.example.com")))
        )
        assert isinstance(err, NoMatch)
        assert not isinstance(err, Undefined)

    def test_plain_values(self, make_stack):
        stack, _ = make_stack()
        ctx = stack.with_context()
        assert recv.seq([3, 1, 2]).has(2)(ctx) is None
        assert isinstance(recv.seq([3, 1, 2]).has(4)(ctx), Undefined)

    def test_callable_key(self, make_stack):
        stack, _ = make_stack()
        ctx = stack.with_context()
        items = [{"id": 2, "name": "b"}, {"id": 1, "name": "a"}]
        assert recv.seq(items, key=lambda e: e["id"]).has(1, {"id": 1, "name": "a"})(ctx) is None
        assert recv.seq(items, key="name").has("b")(ctx) is None

    def test_unorderable_keys(self, make_stack):
        stack, _ = make_stack()
        ctx = stack.with_context()
        err = recv.seq(["a", 1, None]).has("a")(ctx)
        assert isinstance(err, NoMatch)
        assert err.id == "http.Seq"

    def test_key_of_other_type(self, make_stack):
        stack, _ = make_stack()
        ctx = stack.with_context()
        assert isinstance(recv.seq([1, 2, 3]).has("2")(ctx), NoMatch)


class TestChecks:
    """Tests for free-form assertions."""

    def test_check_predicate(self, json_stack):
        stack, _ = json_stack
        assert stack.io(get(recv.check(lambda ctx: ctx.response.status_code == 200))) is None

    def test_check_false(self, json_stack):
        stack, _ = json_stack
        err = stack.io(get(recv.check(lambda ctx: ctx.response.status_code == 201)))
        assert isinstance(err, NoMatch)

    def test_check_error(self, json_stack):
        stack, _ = json_stack
        failure = RuntimeError("too slow")
        assert stack.io(get(recv.check(lambda ctx: failure))) is failure

    def test_check_assertion(self, json_stack):
        stack, _ = json_stack

        def fails(ctx):
            assert ctx.response.status_code == 500

        assert isinstance(stack.io(get(recv.check(fails))), AssertionError)

    def test_defined(self, json_stack):
        stack, _ = json_stack
        etag = Ref(str)
        site = Ref(Site)
        err = stack.io(get(recv.body(site), recv.defined(site), recv.defined(etag)))
        assert isinstance(err, Undefined)
        assert err.key == "str"

    def test_defined_empty(self, make_stack):
        stack, _ = make_stack()
        ctx = stack.with_context()
        assert isinstance(recv.defined(Ref(list, []))(ctx), Undefined)
        assert recv.defined(Ref(int, 0))(ctx) is None

    def test_value_is(self, json_stack):
        stack, _ = json_stack
        site = Ref(Site)
        assert stack.io(get(recv.body(site), recv.value(site).is_(Site(site="example.com")))) is None

        err = stack.io(get(recv.body(site), recv.value(site).is_(Site(site="example.org"))))
        assert isinstance(err, NoMatch)
        assert err.id == "http.Value"
