"""
ProfileTrace selector tables - ordered fallback tiers as data.

Each field is a list of named tiers ordered current markup -> legacy markup ->
generic structure -> universal fallback. Row tables are flat selector lists
whose matches are unioned by the segmenter.
"""

from __future__ import annotations

import soupsieve
from pydantic import BaseModel, ConfigDict, Field, field_validator


def validate_selector(selector: str) -> str:
    """Compile a CSS selector, raising ValueError if soupsieve rejects it."""
    if not selector or not selector.strip():
        raise ValueError("Selector cannot be empty")
    try:
        soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as e:
        raise ValueError(f"Invalid selector {selector!r}: {e}") from e
    return selector


class SelectorTier(BaseModel):
    """A named, ordered group of selectors tried as a unit."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    selectors: tuple[str, ...] = Field(..., min_length=1)
    attribute: str | None = Field(
        default=None, description="Read this attribute instead of text content"
    )

    @field_validator("selectors")
    @classmethod
    def _compile_selectors(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(validate_selector(selector) for selector in value)


def _tier(name: str, *selectors: str, attribute: str | None = None) -> SelectorTier:
    return SelectorTier(name=name, selectors=selectors, attribute=attribute)


# =============================================================================
# TOP CARD
# =============================================================================

FULL_NAME_TIERS = (
    _tier(
        "modern",
        "h1.text-heading-xlarge",
        "h1.inline.t-24.v-align-middle.break-words",
        "div.ph5 h1",
        "main > div > section > div > div > div > div > h1",
    ),
    _tier(
        "legacy",
        "h1.pv-top-card-section__name",
        "h1[data-test-id='hero-title']",
        ".pv-text-details__left-panel h1",
        ".top-card-layout__title",
        "h1[data-test-id='member-name']",
        "div[data-view-name='profile-top-card'] h1",
    ),
    _tier(
        "generic",
        "main section h1",
        "main div.artdeco-card h1",
        "main h1",
        ".pv-top-card div h1",
        ".scaffold-layout__main h1",
        "div[class*='top-card'] h1",
        "div[class*='profile'] h1:first-of-type",
        "section[class*='top-card'] h1",
    ),
    _tier("ultimate", "h1"),
    _tier(
        "metadata",
        "meta[property='og:title']",
        "meta[name='twitter:title']",
        attribute="content",
    ),
    _tier("title", "head > title", "title"),
)

HEADLINE_TIERS = (
    _tier(
        "modern",
        "div.text-body-medium.break-words",
        "div.text-body-medium",
        ".ph5 .text-body-medium",
        "div.ph5 div.text-body-medium",
    ),
    _tier(
        "legacy",
        ".pv-top-card-section__headline",
        ".top-card-layout__headline",
        ".pv-text-details__left-panel div[data-test-id='hero-title-subtitle']",
        "div[data-field='experience-headline']",
        ".pv-top-card div.text-body-medium",
    ),
    _tier(
        "generic",
        "main section div.text-body-medium:first-of-type",
        ".pv-text-details__left-panel > div:nth-child(2)",
        "div[class*='top-card'] div[class*='headline']",
        "main h1 + div",
    ),
)

LOCATION_TIERS = (
    _tier(
        "modern",
        "span.text-body-small.inline.t-black--light.break-words",
        "span.text-body-small.inline",
        ".ph5 .text-body-small",
        "div.mt2.text-body-small",
    ),
    _tier(
        "legacy",
        ".pv-top-card--list li:first-child",
        ".pv-top-card-v2-section__location",
        ".pv-top-card__subline-item",
        ".top-card-layout__entity-info span[data-test-id='hero-location']",
        "span[data-test-id='top-card-location']",
        "div[data-test-id='member-location']",
        "div[data-field='experience-location']",
        "div.text-body-small.inline",
    ),
    _tier(
        "generic",
        "main section span.text-body-small",
        "main section div.text-body-small",
        "section[id*='top-card'] span[class*='location']",
        "div[class*='top-card'] span[class*='location']",
    ),
)

PROFILE_IMAGE_TIERS = (
    _tier(
        "modern",
        "img.profile-photo-edit__preview",
        "img.pv-top-card-profile-picture__image",
        "img[data-test-id='profile-photo']",
        "img.top-card-profile-picture__image",
        "img[class*='profile-photo']",
    ),
    _tier(
        "legacy",
        "img.profile-photo-edit__preview-image",
        "img.pv-top-card-profile-picture__image--show",
        "button.pv-top-card-profile-picture img",
        "div.pv-top-card__photo img",
    ),
    _tier(
        "generic",
        "div.pv-top-card img",
        "section.pv-top-card img",
        "div[class*='top-card'] img:not([alt*='company']):not([alt*='Company'])",
        "button[class*='profile-picture'] img",
    ),
)

# Top-card "current role" hints, consulted only when the experience section is silent
TOP_CARD_TITLE_TIERS = (
    _tier(
        "modern",
        ".pv-top-card--experience-list li span[aria-hidden='true']",
        ".pv-text-details__right-panel li:first-child span[aria-hidden='true']",
    ),
    _tier(
        "legacy",
        ".top-card-layout__entity-info-item span[aria-hidden='true']",
        ".pv-text-details__right-panel li:first-child span",
    ),
)

TOP_CARD_COMPANY_TIERS = (
    _tier(
        "modern",
        "button[aria-label*='current company' i] span",
        ".pv-text-details__right-panel li:first-child span[aria-hidden='true']",
        ".pv-text-details__right-panel li:first-child span",
    ),
    _tier(
        "legacy",
        ".top-card-layout__entity-info-item a[href*='/company/']",
        ".pv-top-card--experience-list a[href*='/company/'] span[aria-hidden='true']",
        "a[data-field='experience_company_logo'] span[aria-hidden='true']",
    ),
)

TOP_CARD_COMPANY_LINK_TIERS = (
    _tier(
        "modern",
        ".pv-text-details__right-panel a[href*='/company/']",
        ".pv-top-card--experience-list a[href*='/company/']",
        attribute="href",
    ),
    _tier(
        "legacy",
        ".top-card-layout__entity-info-item a[href*='/company/']",
        "a[data-field='experience_company_logo']",
        attribute="href",
    ),
)

CONNECTIONS_TIERS = (
    _tier(
        "modern",
        "ul.pv-top-card--list-bullet li:-soup-contains('connection')",
        "li.text-body-small:-soup-contains('connection')",
        "span.t-black--light:-soup-contains('connection')",
    ),
    _tier(
        "legacy",
        ".pv-top-card--list-bullet span:-soup-contains('connection')",
        ".top-card-layout__first-subline span:-soup-contains('connection')",
    ),
    _tier(
        "generic",
        "main section li:-soup-contains('connection')",
        "main section span:-soup-contains('connection')",
    ),
)

FOLLOWERS_TIERS = (
    _tier(
        "modern",
        "ul.pv-top-card--list-bullet li:-soup-contains('follower')",
        "li.text-body-small:-soup-contains('follower')",
        "span.t-black--light:-soup-contains('follower')",
    ),
    _tier(
        "legacy",
        ".pv-top-card--list-bullet span:-soup-contains('follower')",
        ".top-card-layout__first-subline span:-soup-contains('follower')",
    ),
    _tier(
        "generic",
        "main section li:-soup-contains('follower')",
        "main section span:-soup-contains('follower')",
    ),
)


# =============================================================================
# CONTACT BLOCK
# =============================================================================

CONTACT_CONTAINER_SELECTORS = (
    "section.pv-contact-info__contact-type",
    "section[data-test-id='profile-contact-info']",
    "div.artdeco-modal__content",
)

EMAIL_TIERS = (
    _tier(
        "link",
        "a[href^='mailto:']",
        "a[data-test-id='top-card-contact-info-email']",
        "a[data-field='email']",
        attribute="href",
    ),
    _tier(
        "text",
        "section.ci-email a",
        "section.ci-email span.t-14",
        "[data-test-id='contact-email']",
    ),
)

PHONE_SELECTORS = (
    "a[href^='tel:']",
    "section.ci-phone li span.t-14",
    "[data-test-id='top-card-contact-info-phone']",
)

BIRTHDAY_TIERS = (
    _tier(
        "modern",
        "[data-test-id='birthday']",
        "section.ci-birthday span.t-14",
        "section.ci-birthday div",
    ),
)


# =============================================================================
# EXPERIENCE
# =============================================================================

EXPERIENCE_ROW_SELECTORS = (
    # Obfuscated classes: anchor on the section id, first-level list items only
    "div[id='experience'] ~ div > div > ul > li.artdeco-list__item",
    "div.pv-profile-card__anchor#experience ~ div > div > ul > li.artdeco-list__item",
    "div[id='experience'] ~ div ul > li.artdeco-list__item",
    "div.pv-profile-card__anchor#experience ~ div ul > li.artdeco-list__item",
    "section[id*='experience'] ul.pvs-list > li.artdeco-list__item",
    "section[id*='experience'] ul.pvs-list > li",
    "section[id*='experience'] div.pvs-list__container > ul > li",
    "section.artdeco-card.pv-profile-card:has(> div#experience) div[class*='pvs-list'] > ul > li",
    "section#experience-section ul.pv-profile-section__section-info > li",
    "section.experience__section ul > li",
    "section[data-test='experience-section'] ul > li",
    "section[id*='experience'] li.artdeco-list__item",
)

EXPERIENCE_TITLE_TIERS = (
    _tier(
        "modern",
        "div.mr1.t-bold span[aria-hidden='true']",
        "div.display-flex.align-items-center > div.mr1.t-bold span[aria-hidden='true']",
        "div.t-bold > span[aria-hidden='true']:first-child",
        "span.mr1.hoverable-link-text.t-bold span[aria-hidden='true']",
        "div.display-flex.flex-column.full-width > div:first-child "
        "span[aria-hidden='true']:first-child",
    ),
    _tier(
        "legacy",
        "span[data-test='experience-entity-title']",
        "span[data-field='experience-title']",
        "span.t-14.t-black.t-bold",
        "h3 span[aria-hidden='true']",
        "div.display-flex.flex-column.full-width.align-self-center > span:first-child",
    ),
    _tier(
        "generic",
        "div:first-child span[aria-hidden='true']:first-child",
        "span.t-bold span[aria-hidden='true']",
    ),
)

EXPERIENCE_COMPANY_TIERS = (
    _tier(
        "modern",
        "span.t-14.t-normal:not(.t-black--light) > span[aria-hidden='true']",
        "div.t-14.t-normal:not(.t-black--light) > span[aria-hidden='true']",
        "a[href*='/company/'] span.t-14.t-normal span[aria-hidden='true']",
    ),
    _tier(
        "legacy",
        "span[data-test='experience-entity-subtitle']",
        "span[data-field='experience-company-name']",
        "p.pv-entity__secondary-title",
        "span.t-14.t-normal:not(.t-black--light)",
        "div.display-flex.flex-column.full-width.align-self-center span:nth-child(2)",
    ),
    _tier("generic", "span.t-14.t-normal span[aria-hidden='true']"),
)

EXPERIENCE_COMPANY_LINK_TIERS = (
    _tier(
        "link",
        "a[href*='/company/']",
        "a[href*='/school/']",
        "a[href*='linkedin.com/company/']",
        attribute="href",
    ),
)

EXPERIENCE_DATE_TIERS = (
    _tier(
        "modern",
        "span[data-test='experience-entity-date-range']",
        "span[data-field='experience-date-range']",
        "span.pvs-entity__caption-wrapper",
        "span.t-14.t-normal.t-black--light > span[aria-hidden='true']",
        "h4 span.t-14.t-normal.t-black--light",
        "span.t-14.t-normal.t-black--light",
    ),
    _tier(
        "legacy",
        "h4 span.pv-entity__date-range span:nth-child(2)",
        "span.pv-entity__bullet-item-v2",
        "span.pv-entity__caption",
    ),
)

EXPERIENCE_LOCATION_TIERS = (
    _tier(
        "modern",
        "span.t-14.t-normal.t-black--light ~ span.t-14.t-normal.t-black--light "
        "span[aria-hidden='true']",
        "div.t-14.t-normal.t-black--light span[aria-hidden='true']",
        "span.t-14.t-normal.t-black--light span[aria-hidden='true']",
    ),
    _tier(
        "legacy",
        "span.pv-entity__location span:nth-child(2)",
        "span.pv-entity__location",
        "span[data-test='experience-entity-location']",
        "span[data-field='experience-location']",
    ),
)

EXPERIENCE_DESCRIPTION_TIERS = (
    _tier(
        "modern",
        "div.inline-show-more-text span[aria-hidden='true']",
        "div.pvs-list__outer-container div.t-14.t-normal.t-black span[aria-hidden='true']",
    ),
    _tier(
        "legacy",
        "p.pv-entity__description",
        "div.pv-entity__extra-details",
        "span[data-field='experience-description']",
    ),
)


# =============================================================================
# EDUCATION
# =============================================================================

EDUCATION_ROW_SELECTORS = (
    "div[id='education'] ~ div > div > ul > li.artdeco-list__item",
    "div[id='education'] ~ div ul > li.artdeco-list__item",
    "section[id*='education'] ul.pvs-list > li",
    "section#education-section ul.pv-profile-section__section-info > li",
    "section.education__section ul > li",
    "section[data-test='education-section'] ul > li",
)

EDUCATION_SCHOOL_TIERS = (
    _tier(
        "modern",
        "div.mr1.t-bold span[aria-hidden='true']",
        "a[href*='/school/'] span[aria-hidden='true']",
    ),
    _tier(
        "legacy",
        "h3.pv-entity__school-name",
        "h3 span[aria-hidden='true']",
        "span[data-field='education-school']",
    ),
)

EDUCATION_DEGREE_TIERS = (
    _tier("modern", "span.t-14.t-normal:not(.t-black--light) > span[aria-hidden='true']"),
    _tier(
        "legacy",
        "span.pv-entity__degree-name span.pv-entity__comma-item",
        "span.pv-entity__degree-name",
        "span[data-field='education-degree']",
    ),
)

EDUCATION_FIELD_OF_STUDY_TIERS = (
    _tier(
        "legacy",
        "span.pv-entity__fos span.pv-entity__comma-item",
        "span.pv-entity__fos",
        "span[data-field='education-field-of-study']",
    ),
)

EDUCATION_DATE_TIERS = (
    _tier(
        "modern",
        "span.pvs-entity__caption-wrapper",
        "span.t-14.t-normal.t-black--light span[aria-hidden='true']",
    ),
    _tier("legacy", "span.pv-entity__dates time", "span.pv-entity__dates"),
)


# =============================================================================
# ENGAGEMENT (reactors / commenters)
# =============================================================================

REACTOR_ROW_SELECTORS = (
    "li.reactor-entry",
    "li.social-details-reactors-tab__list-item",
    "li[data-test-reaction-row='true']",
    "li.artdeco-list__item",
    "li[data-id='reactor']",
)

COMMENT_ROW_SELECTORS = (
    "article.comments-comment-item",
    "li.comments-comments-list__comment-item",
    "div.comments-comment-item",
    "li[data-id^='urn:li:comment:']",
    "article.feed-shared-update-v2__comment-item",
)

PROFILE_ANCHOR_SELECTORS = (
    "a[href*='/in/']",
    "a.comments-comment-item__profile-link",
    "a.artdeco-entity-lockup__subtitle",
    "a.feed-shared-actor__container-link",
)

REACTOR_NAME_TIERS = (
    _tier(
        "name",
        ".reactor-entry__member-name",
        ".artdeco-entity-lockup__title span[aria-hidden='true']",
        ".artdeco-entity-lockup__title",
        ".feed-shared-actor__name",
        ".reactions-tab__member-name",
    ),
)

COMMENTER_NAME_TIERS = (
    _tier(
        "name",
        ".comments-post-meta__name-text",
        ".comments-comment-item__display-name",
        ".feed-shared-comment__name",
        "a.comments-comment-item__profile-link span",
        "a.comments-comment-item__profile-link",
    ),
)

ENGAGEMENT_HEADLINE_TIERS = (
    _tier(
        "headline",
        ".comments-post-meta__headline",
        ".comments-comment-item__headline",
        ".feed-shared-comment__headline",
        ".reactor-entry__member-headline",
        ".artdeco-entity-lockup__subtitle",
        ".reactions-tab__member-headline",
    ),
)

ENGAGEMENT_LOCATION_TIERS = (
    _tier(
        "location",
        ".comments-comment-item__secondary-content",
        ".reactor-entry__member-secondary-title",
        ".artdeco-entity-lockup__caption",
        ".reactions-tab__member-secondary-title",
    ),
)

REACTION_LABEL_TIERS = (
    _tier("icon", "[data-test-reaction-icon]", attribute="data-test-reaction-icon"),
    _tier("text", ".reactor-entry__reaction-type", ".reactions-tab__member-reaction-type"),
)

COMMENT_TEXT_TIERS = (
    _tier(
        "body",
        ".comments-comment-item__main-content",
        ".comments-comment-item__body",
        ".update-components-comment-body__comment",
        ".feed-shared-comment__text",
    ),
)


# =============================================================================
# COMPANY PEOPLE LISTS
# =============================================================================

ACCOUNT_CARD_SELECTORS = (
    "li.org-people-profile-card",
    "li.org-people-profile-card__profile-list-item",
    "li[data-test-id='org-people-profile-card']",
    "li[data-ember-action][data-control-name='people_profile_card']",
)

ACCOUNT_ANCHOR_SELECTORS = (
    "a.org-people-profile-card__profile-link",
    "a[href*='/in/']",
    "a[data-control-name='people_profile_card']",
)

ACCOUNT_NAME_TIERS = (_tier("name", ".org-people-profile-card__profile-title"),)

ACCOUNT_HEADLINE_TIERS = (
    _tier(
        "headline",
        ".org-people-profile-card__profile-headline",
        ".org-people-profile-card__profile-title + div",
        ".org-people-profile-card__profile-title ~ div.t-14",
        ".org-people-profile-card__profile-info h4 + div",
    ),
)

ACCOUNT_LOCATION_TIERS = (
    _tier(
        "location",
        ".org-people-profile-card__profile-location",
        ".org-people-profile-card__profile-title ~ div.t-12",
        ".org-people-profile-card__profile-info .t-12",
    ),
)

ACCOUNT_COMPANY_NAME_TIERS = (
    _tier(
        "top-card",
        "h1.org-top-card-summary__title",
        "h1.org-top-card-summary__title span",
        "h1.org-top-card-summary__title > div",
        "h1.org-top-card-summary__title > a",
        "div.org-top-card-summary__title h1",
    ),
)
