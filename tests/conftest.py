"""Pytest configuration and fixtures."""

from datetime import UTC, datetime

import pytest

from profiletrace.config import EngineConfig
from profiletrace.dom import Node, parse_html

FIXED_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


# Current markup: obfuscated classes, section anchors, aria-hidden spans
MODERN_PROFILE_HTML = """
<html>
<head><title>Sarah Johnson | LinkedIn</title></head>
<body>
<main>
  <section class="artdeco-card">
    <div class="ph5">
      <h1 class="text-heading-xlarge">Sarah Johnson</h1>
      <div class="text-body-medium break-words">Product Manager at Tech Corp</div>
      <span class="text-body-small inline t-black--light break-words">
        San Francisco Bay Area
      </span>
      <img class="pv-top-card-profile-picture__image" src="https://media.example.com/sarah.jpg">
      <ul class="pv-top-card--list-bullet">
        <li class="text-body-small">1.2K followers</li>
        <li class="text-body-small">500+ connections</li>
      </ul>
    </div>
  </section>

  <section class="artdeco-card">
    <div id="experience" class="pv-profile-card__anchor"></div>
    <div class="pvs-header"><h2>Experience</h2></div>
    <div>
      <div>
        <ul>
          <li class="artdeco-list__item">
            <a href="/company/tech-corp/"><img alt="Tech Corp logo"></a>
            <div class="display-flex flex-column full-width">
              <div class="mr1 t-bold"><span aria-hidden="true">Product Manager</span></div>
              <span class="t-14 t-normal"><span aria-hidden="true">Tech Corp · Full-time</span></span>
              <span class="t-14 t-normal t-black--light">
                <span class="pvs-entity__caption-wrapper" aria-hidden="true">2020 - Present · 4 yrs</span>
              </span>
              <span class="t-14 t-normal t-black--light">
                <span aria-hidden="true">San Francisco, California</span>
              </span>
              <div class="inline-show-more-text">
                <span aria-hidden="true">Leading the payments roadmap.</span>
              </div>
            </div>
          </li>
          <li class="artdeco-list__item">
            <a href="https://www.linkedin.com/company/startup-inc/"><img alt="Startup Inc logo"></a>
            <div class="display-flex flex-column full-width">
              <div class="mr1 t-bold"><span aria-hidden="true">Associate Product Manager</span></div>
              <span class="t-14 t-normal"><span aria-hidden="true">Startup Inc</span></span>
              <span class="t-14 t-normal t-black--light">
                <span class="pvs-entity__caption-wrapper" aria-hidden="true">Jun 2017 – Dec 2019 · 2 yrs 7 mos</span>
              </span>
            </div>
          </li>
        </ul>
      </div>
    </div>
  </section>

  <section class="artdeco-card pv-profile-card">
    <div id="education" class="pv-profile-card__anchor"></div>
    <div class="pvs-header"><h2>Education</h2></div>
    <div>
      <div class="pvs-list__outer-container">
        <ul>
          <li class="artdeco-list__item">
            <a href="https://www.linkedin.com/school/state-university/"><img alt=""></a>
            <div class="display-flex flex-column full-width">
              <div class="mr1 t-bold"><span aria-hidden="true">State University</span></div>
              <span class="t-14 t-normal">
                <span aria-hidden="true">Bachelor of Science, Computer Science</span>
              </span>
              <span class="t-14 t-normal t-black--light">
                <span class="pvs-entity__caption-wrapper" aria-hidden="true">2010 - 2014</span>
              </span>
            </div>
          </li>
        </ul>
      </div>
    </div>
  </section>
</main>
</body>
</html>
"""


# Older markup: pv-entity classes, section ids, contact sections inline
LEGACY_PROFILE_HTML = """
<html>
<head><title>Dana Example | LinkedIn</title></head>
<body>
<div class="pv-top-card">
  <h1 class="pv-top-card-section__name">Dana Example</h1>
  <h2 class="pv-top-card-section__headline">Staff Engineer at Northwind</h2>
  <ul class="pv-top-card--list">
    <li>Chicago, Illinois</li>
    <li>3rd degree connection</li>
  </ul>
  <div class="pv-top-card__photo"><img src="https://media.example.com/dana.jpg"></div>
</div>

<section id="experience-section">
  <ul class="pv-profile-section__section-info">
    <li>
      <a href="/company/northwind/"><span class="pv-entity__secondary-title">Northwind Traders</span></a>
      <span class="t-14 t-black t-bold">Staff Engineer</span>
      <h4><span class="pv-entity__date-range"><span>Dates Employed</span><span>Jan 2021 - Present</span></span></h4>
      <h4><span class="pv-entity__location"><span>Location</span><span>Chicago, Illinois</span></span></h4>
    </li>
    <li>
      <a href="/company/contoso/"><span class="pv-entity__secondary-title">Contoso</span></a>
      <span class="t-14 t-black t-bold">Software Engineer</span>
      <h4><span class="pv-entity__date-range"><span>Dates Employed</span><span>Mar 2016 – Dec 2020</span></span></h4>
    </li>
  </ul>
</section>

<section id="education-section">
  <ul class="pv-profile-section__section-info">
    <li>
      <h3 class="pv-entity__school-name">University of Illinois Chicago</h3>
      <span class="pv-entity__degree-name">
        <span>Degree Name</span><span class="pv-entity__comma-item">Master of Science</span>
      </span>
      <span class="pv-entity__fos">
        <span>Field Of Study</span><span class="pv-entity__comma-item">Computer Science</span>
      </span>
      <span class="pv-entity__dates">2012 – 2014</span>
    </li>
  </ul>
</section>

<section class="pv-contact-info__contact-type ci-email">
  <a href="mailto:dana@example.com">dana@example.com</a>
</section>
<section class="pv-contact-info__contact-type ci-phone">
  <ul><li><a href="tel:+15551234567">+1 555 123 4567</a></li></ul>
</section>
<section class="pv-contact-info__contact-type ci-birthday"><div>March 5</div></section>
</body>
</html>
"""


# Entry A is ongoing and listed second; the headline names a third company
PRECEDENCE_PROFILE_HTML = """
<html>
<body>
<main>
  <section class="artdeco-card">
    <div class="ph5">
      <h1 class="text-heading-xlarge">Alex Rivera</h1>
      <div class="text-body-medium break-words">Founder at Gamma Ventures</div>
    </div>
    <div class="pv-text-details__right-panel">
      <ul>
        <li><a href="/company/gamma-ventures/"><span aria-hidden="true">Gamma Ventures</span></a></li>
      </ul>
    </div>
  </section>
  <section id="experience-section">
    <ul class="pv-profile-section__section-info">
      <li>
        <a href="/company/beta-corp/"><span class="pv-entity__secondary-title">Beta Corp</span></a>
        <span class="t-14 t-black t-bold">Engineer</span>
        <h4><span class="pv-entity__date-range"><span>Dates Employed</span><span>2015 - 2018</span></span></h4>
      </li>
      <li>
        <a href="/company/acme-labs/"><span class="pv-entity__secondary-title">Acme Labs</span></a>
        <span class="t-14 t-black t-bold">Research Lead</span>
        <h4><span class="pv-entity__date-range"><span>Dates Employed</span><span>2019 - Present</span></span></h4>
      </li>
    </ul>
  </section>
</main>
</body>
</html>
"""


# No experience section; the top card is the only source of the current role
TOP_CARD_ONLY_HTML = """
<html>
<body>
<main>
  <section class="artdeco-card">
    <div class="ph5">
      <h1 class="text-heading-xlarge">Jo Park</h1>
      <div class="text-body-medium">Helping teams ship faster</div>
    </div>
    <div class="pv-text-details__right-panel">
      <ul>
        <li>
          <button aria-label="Current company: Initech"><span>Initech</span></button>
          <a href="https://www.linkedin.com/company/initech/">Visit</a>
        </li>
      </ul>
    </div>
  </section>
</main>
</body>
</html>
"""


REACTIONS_HTML = """
<div class="artdeco-modal__content">
  <ul>
    <li class="social-details-reactors-tab__list-item">
      <a class="link-without-hover-state" href="/in/ada-lovelace/">
        <span class="artdeco-entity-lockup__title">
          <span aria-hidden="true">Ada Lovelace</span>
          <span class="visually-hidden">View Ada Lovelace's profile</span>
        </span>
        <span class="artdeco-entity-lockup__subtitle">Mathematician at Analytical Engines</span>
        <span class="artdeco-entity-lockup__caption">London, United Kingdom</span>
      </a>
      <img data-test-reaction-icon="LIKE" alt="like">
    </li>
    <li class="social-details-reactors-tab__list-item">
      <a href="https://www.linkedin.com/in/ada-lovelace/">
        <span class="artdeco-entity-lockup__title"><span aria-hidden="true">Ada L.</span></span>
      </a>
    </li>
    <li class="social-details-reactors-tab__list-item">
      <a href="/in/anon-123/"><img alt=""></a>
    </li>
    <li class="social-details-reactors-tab__list-item"><span>Load more</span></li>
    <li class="social-details-reactors-tab__list-item">
      <a href="/in/grace-hopper/">
        <span class="artdeco-entity-lockup__title">Grace Hopper · 2nd degree connection</span>
        <span class="artdeco-entity-lockup__caption">500+ connections</span>
      </a>
    </li>
  </ul>
</div>
"""


COMMENTS_HTML = """
<section class="comments-comments-list">
  <article class="comments-comment-item">
    <a class="comments-comment-item__profile-link" href="/in/linus-t/"><img alt=""></a>
    <span class="comments-post-meta__name-text"><span aria-hidden="true">Linus Torvalds</span></span>
    <span class="comments-post-meta__headline">Kernel maintainer</span>
    <div class="comments-comment-item__main-content">Great write-up!</div>
  </article>
  <article class="comments-comment-item">
    <a href="/in/ghost/"><img alt=""></a>
    <div class="comments-comment-item__main-content">+1</div>
  </article>
  <article class="comments-comment-item">
    <a href="/in/ghost/"><img alt=""></a>
    <span class="comments-post-meta__name-text">Casper Ghost</span>
    <div class="comments-comment-item__main-content">Agreed.</div>
  </article>
  <article class="comments-comment-item">
    <a href="https://www.linkedin.com/in/linus-t/"><img alt=""></a>
    <span class="comments-post-meta__name-text">Linus Torvalds</span>
    <div class="comments-comment-item__main-content">Follow-up.</div>
  </article>
</section>
"""


PEOPLE_HTML = """
<div>
  <h1 class="org-top-card-summary__title">Initech</h1>
  <ul>
    <li class="org-people-profile-card__profile-list-item">
      <a class="org-people-profile-card__profile-link" href="/in/peter-gibbons/">
        <span class="org-people-profile-card__profile-title">Peter Gibbons</span>
      </a>
      <div class="org-people-profile-card__profile-headline">Software Engineer</div>
      <div class="org-people-profile-card__profile-location">Austin, Texas</div>
    </li>
    <li class="org-people-profile-card__profile-list-item">
      <a class="org-people-profile-card__profile-link" href="/in/hidden-member/"></a>
    </li>
    <li class="org-people-profile-card__profile-list-item">
      <a class="org-people-profile-card__profile-link" href="/in/samir-n/">
        <span class="org-people-profile-card__profile-title">Samir Nagheenanajar</span>
      </a>
      <div class="org-people-profile-card__profile-location">2nd degree connection</div>
    </li>
  </ul>
</div>
"""


@pytest.fixture
def modern_root() -> Node:
    """Parsed modern-markup profile."""
    return parse_html(MODERN_PROFILE_HTML)


@pytest.fixture
def legacy_root() -> Node:
    """Parsed legacy-markup profile."""
    return parse_html(LEGACY_PROFILE_HTML)


@pytest.fixture
def precedence_root() -> Node:
    """Parsed profile with an ended entry before an ongoing one."""
    return parse_html(PRECEDENCE_PROFILE_HTML)


@pytest.fixture
def top_card_root() -> Node:
    """Parsed profile with only a top card."""
    return parse_html(TOP_CARD_ONLY_HTML)


@pytest.fixture
def engine_config() -> EngineConfig:
    """Default engine configuration."""
    return EngineConfig()


@pytest.fixture
def reactions_html() -> str:
    """Reactions modal with a duplicate, an anonymous and a badge-laden row."""
    return REACTIONS_HTML


@pytest.fixture
def comments_html() -> str:
    """Comment thread with a nameless comment and a repeat commenter."""
    return COMMENTS_HTML


@pytest.fixture
def people_html() -> str:
    """Company people page."""
    return PEOPLE_HTML


@pytest.fixture
def modern_html() -> str:
    """Raw modern-markup profile."""
    return MODERN_PROFILE_HTML


@pytest.fixture
def legacy_html() -> str:
    """Raw legacy-markup profile."""
    return LEGACY_PROFILE_HTML


@pytest.fixture
def precedence_html() -> str:
    """Raw profile with an ended entry before an ongoing one."""
    return PRECEDENCE_PROFILE_HTML


@pytest.fixture
def top_card_html() -> str:
    """Raw profile with only a top card."""
    return TOP_CARD_ONLY_HTML


@pytest.fixture
def fixed_time() -> datetime:
    """Deterministic generated_at timestamp."""
    return FIXED_TIME
