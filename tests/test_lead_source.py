import pytest

from conftest import make_lead, next_url
from leadsync.core.errors import GraphAPIError
from leadsync.models.graph import DIRECT_ACCESS


class TestListAllPages:
    """Тесты получения всех страниц."""

    @pytest.mark.asyncio
    async def test_direct_pages_then_business_pages(self, make_lead_source) -> None:
        """Сначала прямые страницы, затем страницы бизнесов по порядку бизнесов."""
        lead_source, stub = make_lead_source(
            {
                "/me/accounts": {
                    "data": [{"id": "p1", "name": "Direct 1"}],
                    "paging": {"next": next_url("/me/accounts", "c2")},
                },
                "/me/accounts?after=c2": {"data": [{"id": "p2", "name": "Direct 2"}]},
                "/me/businesses": {"data": [{"id": "b1", "name": "Biz One"}, {"id": "b2", "name": "Biz Two"}]},
                "/b1/owned_pages": {"data": [{"id": "p3", "name": "B1 page"}, {"id": "p1", "name": "Direct 1"}]},
                "/b2/owned_pages": {"data": [{"id": "p4", "name": "B2 page"}]},
            }
        )

        pages = await lead_source.list_all_pages()

        assert [(p.id, p.business_name) for p in pages] == [
            ("p1", None),
            ("p2", None),
            ("p3", "Biz One"),
            ("p1", "Biz One"),
            ("p4", "Biz Two"),
        ]
        assert [r.url.path for r in stub.requests] == [
            "/v18.0/me/accounts",
            "/v18.0/me/accounts",
            "/v18.0/me/businesses",
            "/v18.0/b1/owned_pages",
            "/v18.0/b2/owned_pages",
        ]

    @pytest.mark.asyncio
    async def test_public_representation(self, make_lead_source) -> None:
        """Страницы без бизнеса помечаются как прямой доступ."""
        lead_source, _ = make_lead_source(
            {
                "/me/accounts": {"data": [{"id": "p1", "name": "Direct", "access_token": "page-token"}]},
                "/me/businesses": {"data": [{"id": "b1", "name": "Biz"}]},
                "/b1/owned_pages": {"data": [{"id": "p2", "name": "Owned"}]},
            }
        )

        pages = await lead_source.list_all_pages()

        assert pages[0].access_token == "page-token"
        assert [p.to_public() for p in pages] == [
            {"id": "p1", "name": "Direct", "business": DIRECT_ACCESS},
            {"id": "p2", "name": "Owned", "business": "Biz"},
        ]

    @pytest.mark.asyncio
    async def test_business_error_propagates(self, make_lead_source) -> None:
        """Ошибка получения бизнесов пробрасывается."""
        lead_source, _ = make_lead_source(
            {
                "/me/accounts": {"data": []},
                "/me/businesses": (403, {"error": {"message": "Missing permission", "code": 200}}),
            }
        )

        with pytest.raises(GraphAPIError, match="Missing permission"):
            await lead_source.list_all_pages()


class TestFormsAndLeads:
    """Тесты получения форм и лидов."""

    @pytest.mark.asyncio
    async def test_forms_first_page_only(self, make_lead_source) -> None:
        """Без GRAPH_FOLLOW_PAGINATION курсор не используется."""
        lead_source, stub = make_lead_source(
            {
                "/p1/leadgen_forms": {
                    "data": [{"id": "f1", "name": "Form 1"}],
                    "paging": {"next": next_url("/p1/leadgen_forms", "c2")},
                },
            }
        )

        forms = await lead_source.list_forms_for_page("p1")

        assert forms == [{"id": "f1", "name": "Form 1"}]
        assert len(stub.requests) == 1
        assert stub.requests[0].url.params["fields"] == "id,name,status,created_time"

    @pytest.mark.asyncio
    async def test_leads_follow_pagination_when_enabled(self, make_lead_source) -> None:
        """С GRAPH_FOLLOW_PAGINATION лиды дочитываются по курсору."""
        lead_source, stub = make_lead_source(
            {
                "/f1/leads": {"data": [make_lead("l1", "a")], "paging": {"next": next_url("/f1/leads", "c2")}},
                "/f1/leads?after=c2": {"data": [make_lead("l2", "b")]},
            },
            follow_pagination=True,
        )

        leads = await lead_source.get_leads_for_form("f1")

        assert [lead.id for lead in leads] == ["l1", "l2"]
        assert len(stub.requests) == 2

    @pytest.mark.asyncio
    async def test_leads_first_page_only(self, make_lead_source) -> None:
        """По умолчанию возвращается только первая страница лидов."""
        lead_source, _ = make_lead_source(
            {
                "/f1/leads": {"data": [make_lead("l1", "a")], "paging": {"next": next_url("/f1/leads", "c2")}},
                "/f1/leads?after=c2": {"data": [make_lead("l2", "b")]},
            }
        )

        leads = await lead_source.get_leads_for_form("f1")

        assert [lead.id for lead in leads] == ["l1"]
        assert leads[0].field_data[0].cell_value == "a"

    @pytest.mark.asyncio
    async def test_form_details_and_page(self, make_lead_source) -> None:
        """Метаданные формы и страницы."""
        lead_source, stub = make_lead_source(
            {
                "/f1": {"id": "f1", "name": "Form", "status": "ACTIVE"},
                "/p1": {"id": "p1", "name": "My Page"},
            }
        )

        form = await lead_source.get_form_details("f1")
        page = await lead_source.get_page("p1")

        assert form["status"] == "ACTIVE"
        assert page.name == "My Page"
        assert stub.requests[0].url.params["fields"] == "id,name,page,status,created_time"
