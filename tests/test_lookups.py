import httpx
import pytest

from beautyboosters import cache
from beautyboosters.routes import lookups
from beautyboosters.routes.lookups import reverse_fields, suggestion_text

REAL_ASYNC_CLIENT = httpx.AsyncClient


@pytest.fixture
def upstream(monkeypatch):
    """Route the lookup module's outgoing requests to a handler set by the test"""
    calls = []
    state = {"handler": None}

    def transport_handler(request):
        calls.append(request)
        return state["handler"](request)

    def client_factory(**kwargs):
        return REAL_ASYNC_CLIENT(transport=httpx.MockTransport(transport_handler), **kwargs)

    monkeypatch.setattr(lookups.httpx, "AsyncClient", client_factory)

    def use(handler):
        state["handler"] = handler
        return calls

    return use


class FakeRedis:
    def __init__(self):
        self.store = {}

    def get(self, key):
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self.store[key] = value


class TestPayloadHelpers:
    def test_suggestion_text_prefers_tekst(self):
        assert suggestion_text({"tekst": "A", "forslagstekst": "B"}) == "A"
        assert suggestion_text({"adressebetegnelse": "C"}) == "C"
        assert suggestion_text({}) is None

    def test_reverse_fields_flat_and_nested(self):
        flat = {"vejnavn": "Vesterbrogade", "husnr": "10", "postnr": "1620", "postnrnavn": "København V"}
        assert reverse_fields(flat) == {"street": "Vesterbrogade 10", "zipcode": "1620", "city": "København V"}

        nested = {
            "adgangsadresse": {"vejstykke": {"navn": "Algade"}, "husnr": "3", "postnr": 4000, "postnummernavn": "Roskilde"}
        }
        assert reverse_fields(nested) == {"street": "Algade 3", "zipcode": "4000", "city": "Roskilde"}


class TestAddressAutocomplete:
    def test_short_query_skips_upstream(self, client, upstream):
        calls = upstream(lambda request: httpx.Response(500))
        resp = client.get("/lookups/address/autocomplete", params={"q": "ve"})
        assert resp.json() == {"suggestions": []}
        assert calls == []

    def test_suggestions(self, client, upstream):
        items = [{"tekst": f"Vesterbrogade {i}, 1620 København V"} for i in range(10)]
        calls = upstream(lambda request: httpx.Response(200, json=items))

        resp = client.get("/lookups/address/autocomplete", params={"q": "Vesterbro"})

        assert resp.status_code == 200
        assert len(resp.json()["suggestions"]) == 8
        assert calls[0].url.path == "/autocomplete"
        assert calls[0].url.params["fuzzy"] == "true"

    def test_upstream_failure(self, client, upstream):
        def boom(request):
            raise httpx.ConnectError("down", request=request)

        upstream(boom)
        resp = client.get("/lookups/address/autocomplete", params={"q": "Vesterbro"})
        assert resp.status_code == 502

    def test_cached_suggestions_skip_upstream(self, client, upstream, monkeypatch):
        redis = FakeRedis()
        monkeypatch.setattr(cache, "get_redis_client", lambda: redis)
        calls = upstream(lambda request: httpx.Response(200, json=[{"tekst": "Algade 3, 4000 Roskilde"}]))

        first = client.get("/lookups/address/autocomplete", params={"q": "Algade"}).json()
        second = client.get("/lookups/address/autocomplete", params={"q": "ALGADE"}).json()

        assert first == second == {"suggestions": ["Algade 3, 4000 Roskilde"]}
        assert len(calls) == 1


class TestAddressParseAndReverse:
    def test_parse(self, client):
        resp = client.get("/lookups/address/parse", params={"text": "Vesterbrogade 10, 1620 København V"})
        assert resp.json() == {
            "street": "Vesterbrogade 10",
            "zipcode": "1620",
            "city": "København V",
            "text": "Vesterbrogade 10, 1620 København V",
        }
        assert client.get("/lookups/address/parse", params={"text": "bare en by"}).status_code == 400

    def test_reverse_falls_back_to_access_address(self, client, upstream):
        def handler(request):
            if request.url.path == "/adresser/reverse":
                return httpx.Response(404)
            return httpx.Response(
                200, json={"vejnavn": "Algade", "husnr": "3", "postnr": "4000", "postnrnavn": "Roskilde"}
            )

        calls = upstream(handler)
        resp = client.get("/lookups/address/reverse", params={"lat": 55.64, "lng": 12.08})

        assert resp.json()["text"] == "Algade 3, 4000 Roskilde"
        assert [c.url.path for c in calls] == ["/adresser/reverse", "/adgangsadresser/reverse"]
        assert calls[0].url.params["x"] == "12.08"

    def test_reverse_nothing_found(self, client, upstream):
        upstream(lambda request: httpx.Response(200, json=[]))
        assert client.get("/lookups/address/reverse", params={"lat": 0, "lng": 0}).status_code == 404


class TestCvrLookup:
    def test_company_details(self, client, upstream):
        company = {
            "vat": 12345678,
            "name": "Salon Lys ApS",
            "address": "Algade 3",
            "zipcode": 4000,
            "city": "Roskilde",
            "employees": 5,
            "industrydesc": "Frisørsaloner",
        }
        calls = upstream(lambda request: httpx.Response(200, json=company))

        resp = client.get("/lookups/cvr/12345678")

        assert resp.status_code == 200
        body = resp.json()
        assert body["cvr"] == "12345678"
        assert body["zipcode"] == "4000"
        assert body["employees"] == "5"
        assert body["industry_description"] == "Frisørsaloner"
        assert calls[0].url.params["country"] == "dk"
        assert "User-Agent" in calls[0].headers

    def test_invalid_number(self, client, upstream):
        calls = upstream(lambda request: httpx.Response(200, json={}))
        assert client.get("/lookups/cvr/1234").status_code == 400
        assert client.get("/lookups/cvr/abcdefgh").status_code == 400
        assert calls == []

    def test_unknown_company(self, client, upstream):
        upstream(lambda request: httpx.Response(200, json={"error": "NOT_FOUND"}))
        assert client.get("/lookups/cvr/87654321").status_code == 404

    def test_upstream_error(self, client, upstream):
        upstream(lambda request: httpx.Response(503))
        resp = client.get("/lookups/cvr/87654321")
        assert resp.status_code == 502
        assert resp.json()["detail"] == "Could not verify CVR number"
