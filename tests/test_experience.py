"""Tests for row segmentation and experience/education analysis."""

from profiletrace.analyzer import analyze_html
from profiletrace.config import SelectorCatalog
from profiletrace.dom import Node, parse_html
from profiletrace.experience import (
    analyze_experience_row,
    analyze_experience_rows,
    extract_education,
)
from profiletrace.segmenter import (
    collect_rows,
    find_education_rows,
    find_experience_rows,
    looks_like_education,
)

ORIGIN = "https://www.linkedin.com/"

# A Skills card shares the profile-card markup of the Experience card
SKILLS_BESIDE_EXPERIENCE_HTML = """
<main>
  <section class="artdeco-card pv-profile-card">
    <div id="experience" class="pv-profile-card__anchor"></div>
    <div>
      <div class="pvs-list__outer-container">
        <ul>
          <li class="artdeco-list__item">
            <div class="mr1 t-bold"><span aria-hidden="true">Engineer</span></div>
            <span class="t-14 t-normal"><span aria-hidden="true">Acme Labs</span></span>
            <span class="t-14 t-normal t-black--light">
              <span aria-hidden="true">2015 - 2019 · 4 yrs</span>
            </span>
          </li>
        </ul>
      </div>
    </div>
  </section>
  <section class="artdeco-card pv-profile-card">
    <div id="skills" class="pv-profile-card__anchor"></div>
    <div>
      <div class="pvs-list__outer-container">
        <ul>
          <li class="artdeco-list__item">
            <div class="mr1 t-bold"><span aria-hidden="true">Python</span></div>
          </li>
        </ul>
      </div>
    </div>
  </section>
</main>
"""

# Each caption carries an aria-hidden copy and a screen-reader copy
HIDDEN_DUPLICATE_ROW_HTML = """
<li class="artdeco-list__item">
  <div class="mr1 t-bold">
    <span aria-hidden="true">Engineer</span><span class="visually-hidden">Engineer</span>
  </div>
  <span class="t-14 t-normal">
    <span aria-hidden="true">Acme Labs</span><span class="visually-hidden">Acme Labs</span>
  </span>
  <span class="t-14 t-normal t-black--light">
    <span aria-hidden="true">Jan 2020 - Present · 4 yrs</span><span class="visually-hidden">Jan 2020 - Present · 4 yrs</span>
  </span>
</li>
"""


def _row(html: str) -> Node:
    return parse_html(f"<ul>{html}</ul>").query_first("li")


class TestCollectRows:
    """Tests for collect_rows."""

    def test_union_without_duplicates(self) -> None:
        """Test overlapping selectors yield each element once, selector order first."""
        root = parse_html('<ul><li class="a">1</li><li class="a b">2</li><li class="b">3</li></ul>')
        rows = collect_rows(root, ["li.b", "li.a"])
        assert [row.text() for row in rows] == ["2", "3", "1"]


class TestLooksLikeEducation:
    """Tests for the education leak filter."""

    def test_school_row_detected(self) -> None:
        """Test a school-linked row without employment signals is education."""
        row = _row('<li><a href="/school/mit/">MIT</a><span>Bachelor of Science</span></li>')
        assert looks_like_education(row) is True

    def test_university_role_with_duration_kept(self) -> None:
        """Test an academic-sounding role with a duration stays experience."""
        row = _row("<li><span>University Relations Manager</span><span>2021 - Present</span></li>")
        assert looks_like_education(row) is False

    def test_degree_words_with_company_link_kept(self) -> None:
        """Test a company link overrides degree keywords."""
        row = _row('<li><a href="/company/college-board/">College Board</a></li>')
        assert looks_like_education(row) is False

    def test_plain_role(self) -> None:
        """Test an ordinary role is not education."""
        row = _row("<li><span>Staff Engineer</span></li>")
        assert looks_like_education(row) is False


class TestSegmentation:
    """Tests for experience/education row discovery."""

    def test_modern_rows(self, modern_root: Node) -> None:
        """Test modern rows are found and the education card stays out."""
        rows = find_experience_rows(modern_root, SelectorCatalog())
        assert len(rows) == 2
        assert "Product Manager" in rows[0].text()

    def test_modern_education_rows(self, modern_root: Node) -> None:
        """Test education rows come from the education section."""
        rows = find_education_rows(modern_root, SelectorCatalog())
        assert len(rows) == 1
        assert "State University" in rows[0].text()

    def test_legacy_rows(self, legacy_root: Node) -> None:
        """Test legacy section markup is segmented."""
        assert len(find_experience_rows(legacy_root, SelectorCatalog())) == 2
        assert len(find_education_rows(legacy_root, SelectorCatalog())) == 1

    def test_other_profile_cards_excluded(self) -> None:
        """Test rows from a Skills card never join the experience list."""
        rows = find_experience_rows(parse_html(SKILLS_BESIDE_EXPERIENCE_HTML), SelectorCatalog())

        assert len(rows) == 1
        assert "Engineer" in rows[0].text()
        assert "Python" not in rows[0].text()

    def test_ended_roles_keep_current_title(self) -> None:
        """Test an ended role, not a dateless skill row, supplies the current title."""
        result = analyze_html(SKILLS_BESIDE_EXPERIENCE_HTML)

        assert [e.title for e in result.profile.experiences] == ["Engineer"]
        assert result.profile.current_title == "Engineer"
        assert result.profile.current_company == "Acme Labs"


class TestAnalyzeExperienceRow:
    """Tests for per-row field resolution."""

    def test_modern_current_row(self, modern_root: Node) -> None:
        """Test a modern row resolves every field."""
        catalog = SelectorCatalog()
        row = find_experience_rows(modern_root, catalog)[0]
        insight = analyze_experience_row(row, 0, catalog, ORIGIN)
        fields = insight.fields

        assert fields.title.value == "Product Manager"
        assert fields.title.confidence == 0.99
        assert fields.company.value == "Tech Corp"
        assert fields.company_url.value == "https://www.linkedin.com/company/tech-corp/"
        assert fields.company_url.attribute == "href"
        assert fields.date_range.value == "2020 - Present · 4 yrs"
        assert fields.location.value == "San Francisco, California"
        assert fields.description.value == "Leading the payments roadmap."
        assert insight.start_date == "2020"
        assert insight.end_date is None
        assert insight.is_current is True

    def test_company_from_span_when_link_has_no_text(self, modern_root: Node) -> None:
        """Test an image-only company link falls back to the styled span."""
        catalog = SelectorCatalog()
        row = find_experience_rows(modern_root, catalog)[0]
        company = analyze_experience_row(row, 0, catalog, ORIGIN).fields.company

        assert company.matched_selector == (
            "span.t-14.t-normal:not(.t-black--light) > span[aria-hidden='true']"
        )
        assert "a[href*='/company/']" in company.tried_selectors

    def test_company_from_link_text(self, legacy_root: Node) -> None:
        """Test link text is preferred when the company link has any."""
        catalog = SelectorCatalog()
        row = find_experience_rows(legacy_root, catalog)[0]
        insight = analyze_experience_row(row, 0, catalog, ORIGIN)

        assert insight.fields.company.value == "Northwind Traders"
        assert insight.fields.company.matched_selector == "a[href*='/company/']"
        assert insight.fields.company.confidence == 0.99
        assert insight.fields.company_url.value == "https://www.linkedin.com/company/northwind/"

    def test_legacy_tiers(self, legacy_root: Node) -> None:
        """Test legacy rows resolve through the legacy tiers."""
        catalog = SelectorCatalog()
        row = find_experience_rows(legacy_root, catalog)[0]
        fields = analyze_experience_row(row, 0, catalog, ORIGIN).fields

        assert fields.title.value == "Staff Engineer"
        assert fields.title.tier == "legacy"
        assert fields.title.confidence == 0.65
        assert fields.date_range.value == "Jan 2021 - Present"
        assert fields.location.value == "Chicago, Illinois"

    def test_location_never_repeats_dates(self, modern_root: Node) -> None:
        """Test a caption that only holds the dates is not reported as location."""
        catalog = SelectorCatalog()
        row = find_experience_rows(modern_root, catalog)[1]
        insight = analyze_experience_row(row, 1, catalog, ORIGIN)

        assert insight.fields.date_range.value == "Jun 2017 – Dec 2019 · 2 yrs 7 mos"
        assert insight.fields.location.value is None
        assert insight.end_date == "Dec 2019"
        assert insight.is_current is False

    def test_missing_dates_count_as_current(self) -> None:
        """Test a row with no date range has no end date and is current."""
        row = _row('<li><div class="mr1 t-bold"><span aria-hidden="true">Advisor</span></div></li>')
        insight = analyze_experience_row(row, 0, SelectorCatalog(), ORIGIN)

        assert insight.fields.date_range.value is None
        assert insight.is_current is True

    def test_hidden_duplicate_captions(self) -> None:
        """Test screen-reader copies are not read twice and dates never become location."""
        insight = analyze_experience_row(
            _row(HIDDEN_DUPLICATE_ROW_HTML), 0, SelectorCatalog(), ORIGIN
        )
        fields = insight.fields

        assert fields.title.value == "Engineer"
        assert fields.company.value == "Acme Labs"
        assert fields.date_range.value == "Jan 2020 - Present · 4 yrs"
        assert fields.date_range.matched_selector == (
            "span.t-14.t-normal.t-black--light > span[aria-hidden='true']"
        )
        assert fields.location.value is None
        assert insight.start_date == "Jan 2020"
        assert insight.is_current is True

    def test_date_like_location_rejected(self) -> None:
        """Test a location caption holding a different date rendering is rejected."""
        row = _row(
            "<li>"
            '<div class="mr1 t-bold"><span aria-hidden="true">Engineer</span></div>'
            '<span data-test="experience-entity-date-range">2015 - 2019</span>'
            '<span class="t-14 t-normal t-black--light">'
            '<span aria-hidden="true">2015 - 2019 · 4 yrs</span></span>'
            "</li>"
        )
        insight = analyze_experience_row(row, 0, SelectorCatalog(), ORIGIN)

        assert insight.fields.date_range.value == "2015 - 2019"
        assert insight.fields.location.value is None


class TestAnalyzeExperienceRows:
    """Tests for analyze_experience_rows."""

    def test_empty_rows_dropped_and_reindexed(self) -> None:
        """Test content-less rows are skipped and indices stay contiguous."""
        root = parse_html(
            "<ul>"
            "<li></li>"
            '<li><div class="mr1 t-bold"><span aria-hidden="true">Advisor</span></div></li>'
            "</ul>"
        )
        insights = analyze_experience_rows(root.query_all("li"), SelectorCatalog(), ORIGIN)

        assert len(insights) == 1
        assert insights[0].index == 0
        assert insights[0].to_entry().title == "Advisor"


class TestExtractEducation:
    """Tests for extract_education."""

    def test_modern_education(self, modern_root: Node) -> None:
        """Test modern education fields."""
        catalog = SelectorCatalog()
        entries = extract_education(find_education_rows(modern_root, catalog), catalog)

        assert len(entries) == 1
        assert entries[0].school == "State University"
        assert entries[0].degree == "Bachelor of Science, Computer Science"
        assert entries[0].date_range_text == "2010 - 2014"

    def test_legacy_education(self, legacy_root: Node) -> None:
        """Test legacy degree/field-of-study spans."""
        catalog = SelectorCatalog()
        entries = extract_education(find_education_rows(legacy_root, catalog), catalog)

        assert entries[0].school == "University of Illinois Chicago"
        assert entries[0].degree == "Master of Science"
        assert entries[0].field_of_study == "Computer Science"
        assert entries[0].date_range_text == "2012 – 2014"
