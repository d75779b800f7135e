import pytest

from core.errors import ProviderResponseError
from core.projection import (
    project,
    project_document_detail,
    project_document_search,
    project_page_detail,
    project_page_list,
    project_page_search,
)
from tests.conftest import document_item, page_item


class TestPageSearch:
    def test_flattens_meta_and_keeps_other_fields(self):
        item = page_item(3, "About", locale="en")
        item["intro"] = "Who we are"
        envelope = project_page_search({"meta": {"total_count": 1}, "items": [item]})

        page = envelope.items[0]
        assert page["id"] == 3
        assert page["type"] == "home.HomePage"
        assert page["locale"] == "en"
        assert page["slug"] == "about"
        assert page["url"] == "https://cms.example.com/about/"
        assert page["detail_api_url"] == "https://cms.example.com/api/v2/pages/3/"
        assert page["title"] == "About"
        assert page["intro"] == "Who we are"
        assert "meta" not in page

    def test_meta_value_shadows_custom_field_of_same_name(self):
        item = page_item(3, "About")
        item["url"] = "custom-url-field"
        item["subtitle"] = "kept"
        page = project_page_search({"meta": {"total_count": 1}, "items": [item]}).items[0]
        assert page["url"] == "https://cms.example.com/about/"
        assert page["subtitle"] == "kept"

    def test_locale_only_when_present(self):
        envelope = project_page_search({"meta": {"total_count": 1}, "items": [page_item()]})
        assert "locale" not in envelope.items[0]

    def test_count_and_total(self):
        envelope = project_page_search({"meta": {"total_count": 40}, "items": [page_item(1), page_item(2)]})
        assert envelope.count == 2
        assert envelope.total_available == 40

    def test_empty_items_with_nonzero_total_is_success(self):
        envelope = project_page_search({"meta": {"total_count": 12}, "items": []})
        assert envelope.to_dict() == {"count": 0, "total_available": 12, "items": []}

    @pytest.mark.parametrize("response", [
        {"items": []},
        {"meta": {"total_count": "many"}, "items": []},
        {"meta": {"total_count": True}, "items": []},
        {"meta": {"total_count": 1}, "items": {"id": 1}},
        {"meta": {"total_count": 1}},
        [],
        None,
    ])
    def test_invalid_structures(self, response):
        with pytest.raises(ProviderResponseError):
            project_page_search(response)


def test_page_list_keeps_items_verbatim():
    item = page_item(8, "Blog")
    envelope = project_page_list({"meta": {"total_count": 1}, "items": [item]})
    assert envelope.items == [item]
    assert envelope.count == 1


class TestPageDetail:
    def test_verbatim(self):
        body = {"id": 5, "meta": {"type": "home.HomePage"}, "title": "Home", "body": "<p>hi</p>"}
        assert project_page_detail(body) == body

    @pytest.mark.parametrize("body", [None, {}, ""])
    def test_empty_body(self, body):
        with pytest.raises(ProviderResponseError):
            project_page_detail(body)


class TestDocuments:
    def test_incomplete_documents_are_dropped_but_total_is_kept(self):
        response = {
            "meta": {"total_count": 3},
            "items": [
                document_item(1, "Budget"),
                document_item(2, "Minutes", download_url=None),
                document_item(3, "Plan"),
            ],
        }
        envelope = project_document_search(response)
        assert envelope.count == 2
        assert envelope.total_available == 3
        assert [doc["id"] for doc in envelope.items] == [1, 3]
        assert envelope.items[0] == {
            "id": 1,
            "title": "Budget",
            "download_url": "/documents/1/budget.pdf",
        }

    def test_detail(self):
        assert project_document_detail(document_item(9, "Policy")) == {
            "id": 9,
            "title": "Policy",
            "download_url": "/documents/9/policy.pdf",
        }

    def test_detail_missing_download_url_is_fatal(self):
        with pytest.raises(ProviderResponseError):
            project_document_detail(document_item(9, "Policy", download_url=None))


def test_project_dispatch():
    assert project("get_page_details", {"id": 1}) == {"id": 1}
    with pytest.raises(ValueError):
        project("delete_everything", {})
