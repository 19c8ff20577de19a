"""Tests for CSV ingestion and export."""

import pytest

from lead_scoring.errors import LeadImportError, NoResultsError
from lead_scoring.models.schemas import Intent, ScoredLead
from lead_scoring.tabular import read_leads_csv, results_to_csv


class TestReadLeadsCsv:
    """Lead ingestion."""

    def test_reads_rows_in_order(self):
        """Rows become leads in file order."""
        contents = (
            b"name,role,company,industry,location,linkedin_bio\n"
            b"Ava,CEO,Flow,SaaS,Austin,Builder\n"
            b"Ben,Analyst,Nord,Retail,Oslo,Numbers person\n"
        )
        leads = read_leads_csv(contents)
        assert [l.name for l in leads] == ["Ava", "Ben"]
        assert leads[0].role == "CEO"
        assert leads[1].linkedin_bio == "Numbers person"

    def test_missing_columns_and_blank_cells_become_empty(self):
        """Headers are case-insensitive; gaps become empty strings."""
        contents = b"Name,Role\nAva,\n"
        leads = read_leads_csv(contents)
        assert len(leads) == 1
        assert leads[0].name == "Ava"
        assert leads[0].role == ""
        assert leads[0].company == ""
        assert leads[0].linkedin_bio == ""

    def test_trailing_extra_field_does_not_shift_columns(self):
        """A row wider than the header keeps every field in place."""
        contents = (
            b"name,role,company,industry,location,linkedin_bio\n"
            b"A,CEO,B,SaaS,C,D,extra\n"
        )
        leads = read_leads_csv(contents)
        assert len(leads) == 1
        lead = leads[0]
        assert (lead.name, lead.role, lead.company) == ("A", "CEO", "B")
        assert (lead.industry, lead.location, lead.linkedin_bio) == ("SaaS", "C", "D")

    def test_empty_file(self):
        """An empty file cannot be imported."""
        with pytest.raises(LeadImportError):
            read_leads_csv(b"")


class TestResultsToCsv:
    """Result export."""

    def _result(self, **overrides):
        data = dict(
            name="Ava",
            role="CEO",
            company="Flow",
            intent=Intent.HIGH,
            score=90,
            reason="Strong fit",
            raw_rule_score=40,
            raw_ai_points=50,
        )
        data.update(overrides)
        return ScoredLead(**data)

    def test_header_and_quoted_rows(self):
        """Header is plain, every data field is quoted."""
        output = results_to_csv([self._result()])
        lines = output.splitlines()
        assert lines[0] == "name,role,company,intent,score,reason"
        assert lines[1] == '"Ava","CEO","Flow","High","90","Strong fit"'

    def test_internal_quotes_are_doubled(self):
        """Quotes inside a field are doubled."""
        output = results_to_csv([self._result(reason='Said "yes" on call')])
        assert '"Said ""yes"" on call"' in output

    def test_empty_results(self):
        """Nothing to export is an error."""
        with pytest.raises(NoResultsError):
            results_to_csv([])
