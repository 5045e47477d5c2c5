"""Tests for paginated remote listings."""

from unittest.mock import MagicMock

from docsupload.entries_manager import RemoteEntriesManager
from docsupload.exceptions import DocsNetworkError
from docsupload.models import RemoteDocument, RemoteFolder


def page(entries, current, last):
    return {"data": entries, "current_page": current, "last_page": last}


class TestListFolders:
    """Tests for list_folders."""

    def test_fetches_all_pages(self):
        """Test every page is requested until the last one."""
        mock_client = MagicMock()
        mock_client.get_entries.side_effect = [
            page([{"id": 1, "name": "A", "type": "folder"}], 1, 2),
            page([{"id": 2, "name": "B", "type": "folder"}], 2, 2),
        ]
        manager = RemoteEntriesManager(mock_client, per_page=1)

        folders = manager.list_folders("10")

        assert [f.title for f in folders] == ["A", "B"]
        assert mock_client.get_entries.call_count == 2
        last_call = mock_client.get_entries.call_args.kwargs
        assert last_call["page"] == 2
        assert last_call["parent_id"] == "10"
        assert last_call["entry_type"] == "folder"

    def test_filters_non_folders(self):
        """Test entries of other types are dropped even if returned."""
        mock_client = MagicMock()
        mock_client.get_entries.return_value = [
            {"id": 1, "name": "A", "type": "folder"},
            {"id": 2, "name": "notes", "type": "document"},
        ]
        manager = RemoteEntriesManager(mock_client)

        assert manager.list_folders() == [RemoteFolder(id="1", title="A")]

    def test_partial_results_on_error(self):
        """Test entries fetched before an error are still returned."""
        mock_client = MagicMock()
        mock_client.get_entries.side_effect = [
            page([{"id": 1, "name": "A", "type": "folder"}], 1, 3),
            DocsNetworkError("down"),
        ]
        manager = RemoteEntriesManager(mock_client)

        assert [f.title for f in manager.list_folders()] == ["A"]


class TestListDocuments:
    """Tests for list_documents."""

    def test_excludes_folders(self):
        mock_client = MagicMock()
        mock_client.get_entries.return_value = page(
            [
                {"id": 1, "name": "A", "type": "folder"},
                {"id": 2, "title": "notes", "type": "document", "parent_id": 5},
            ],
            1,
            1,
        )
        manager = RemoteEntriesManager(mock_client)

        docs = manager.list_documents("5")

        assert docs == [
            RemoteDocument(id="2", title="notes", type="document", parent_id="5")
        ]
        kwargs = mock_client.get_entries.call_args.kwargs
        assert kwargs["exclude_type"] == "folder"

    def test_not_cached(self):
        """Test every call goes to the service."""
        mock_client = MagicMock()
        mock_client.get_entries.return_value = page([], 1, 1)
        manager = RemoteEntriesManager(mock_client)

        manager.list_documents(None)
        manager.list_documents(None)

        assert mock_client.get_entries.call_count == 2
