"""Tests for link assembly."""

import logging

from issue_linker.core.models import Position, Provider
from issue_linker.document import TextDocument
from issue_linker.linker import DocumentLinker


def make_doc(root, text, language="javascript", name="app.js"):
    return TextDocument(file_path=str(root / name), text=text, language_id=language)


class TestDocumentLinker:
    def test_end_to_end(self, fake_repo, js_sample):
        root, resolver, _ = fake_repo("git@github.com:owner/repo.git")
        links = DocumentLinker(resolver).provide_links(make_doc(root, js_sample))

        assert [link.target_url for link in links] == [
            "https://github.com/owner/repo/issues/789",
            "https://github.com/owner/repo/issues/101112",
            "https://github.com/owner/repo/issues/131415",
        ]
        assert [link.tooltip for link in links] == [
            "Open GitHub Issue #789",
            "Open GitHub Issue #101112",
            "Open GitHub Issue #131415",
        ]

    def test_ranges(self, fake_repo, js_sample):
        root, resolver, _ = fake_repo("git@github.com:owner/repo.git")
        links = DocumentLinker(resolver).provide_links(make_doc(root, js_sample))

        assert [(l.range.start, l.range.end) for l in links] == [
            (Position(0, 22), Position(0, 28)),
            (Position(1, 25), Position(1, 34)),
            (Position(3, 3), Position(3, 12)),
        ]
        for link in links:
            assert js_sample[link.document_start_offset:link.document_end_offset] == (
                f"(#{link.issue_number})"
            )

    def test_reference_spanning_lines(self, fake_repo):
        root, resolver, _ = fake_repo("git@github.com:o/r.git")
        text = "/* see (\n#5) */"
        (link,) = DocumentLinker(resolver).provide_links(make_doc(root, text))
        assert link.range.start == Position(0, 7)
        assert link.range.end == Position(1, 3)

    def test_gitlab_urls(self, fake_repo):
        root, resolver, _ = fake_repo("https://gitlab.com/group/proj.git")
        doc = make_doc(root, "# todo (#3)\n", language="python", name="a.py")
        (link,) = DocumentLinker(resolver).provide_links(doc)
        assert link.target_url == "https://gitlab.com/group/proj/-/issues/3"
        assert link.tooltip == "Open GitLab Issue #3"

    def test_generic_provider_tooltip(self, fake_repo):
        root, resolver, _ = fake_repo("https://git.example.org/team/tool")
        doc = make_doc(root, "// (#8)")
        (link,) = DocumentLinker(resolver).provide_links(doc)
        assert link.tooltip == "Open Git Issue #8"
        assert link.target_url == "https://git.example.org/team/tool/issues/8"

    def test_references_outside_comments_ignored(self, fake_repo):
        root, resolver, _ = fake_repo("git@github.com:o/r.git")
        doc = make_doc(root, 'call("(#1)"); // (#2)')
        assert [l.issue_number for l in DocumentLinker(resolver).provide_links(doc)] == ["2"]

    def test_no_repository(self, no_repo_resolver, js_sample, tmp_path):
        resolver, reader = no_repo_resolver
        assert DocumentLinker(resolver).provide_links(make_doc(tmp_path, js_sample)) == []
        assert reader.calls == []

    def test_remote_failure(self, fake_repo, js_sample):
        root, resolver, _ = fake_repo(error=OSError("git missing"))
        assert DocumentLinker(resolver).provide_links(make_doc(root, js_sample)) == []

    def test_resolves_once_per_document(self, fake_repo, js_sample):
        root, resolver, reader = fake_repo("git@github.com:o/r.git")
        DocumentLinker(resolver).provide_links(make_doc(root, js_sample))
        assert len(reader.calls) == 1

    def test_idempotent(self, fake_repo, js_sample):
        root, resolver, _ = fake_repo("git@github.com:o/r.git")
        linker = DocumentLinker(resolver)
        doc = make_doc(root, js_sample)
        assert linker.provide_links(doc) == linker.provide_links(doc)

    def test_invalid_range_is_logged_and_skipped(self, fake_repo, caplog):
        root, resolver, _ = fake_repo("git@github.com:o/r.git")

        class BrokenDocument(TextDocument):
            def position_at(self, offset):
                return Position(0, -offset)

        doc = BrokenDocument(file_path=str(root / "a.js"), text="// (#1)", language_id="javascript")
        with caplog.at_level(logging.ERROR, logger="issue_linker.linker"):
            assert DocumentLinker(resolver).provide_links(doc) == []
        assert "Invalid range" in caplog.text


class TestBatch:
    def test_scan_document(self, fake_repo, js_sample):
        root, resolver, _ = fake_repo("git@bitbucket.org:team/repo.git")
        result = DocumentLinker(resolver).scan_document(make_doc(root, js_sample))
        assert result.repo_info.provider_name is Provider.BITBUCKET
        assert len(result.links) == 3
        assert '"provider_name": "Bitbucket"' in result.to_json()

    def test_scan_document_without_repo(self, no_repo_resolver, tmp_path):
        resolver, _ = no_repo_resolver
        result = DocumentLinker(resolver).scan_document(make_doc(tmp_path, "// (#1)"))
        assert result.repo_info is None
        assert result.links == []

    def test_cancellation_checked_between_documents(self, fake_repo):
        root, resolver, _ = fake_repo("git@github.com:o/r.git")

        class Token:
            def __init__(self):
                self.checks = 0

            @property
            def is_cancellation_requested(self):
                self.checks += 1
                return self.checks > 1

        docs = [make_doc(root, "// (#1)", name=f"{i}.js") for i in range(3)]
        results = DocumentLinker(resolver).link_documents(docs, Token())
        assert len(results) == 1
        assert results[0].links[0].issue_number == "1"

    def test_without_cancellation(self, fake_repo):
        root, resolver, _ = fake_repo("git@github.com:o/r.git")
        docs = [make_doc(root, "// (#1)", name=f"{i}.js") for i in range(3)]
        assert len(DocumentLinker(resolver).link_documents(docs)) == 3
