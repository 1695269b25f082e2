"""Built-in HTML templates for archive grids and field widgets.

Card bodies are rendered conditionally: a line disappears when one of its
placeholders is empty. The card wrapper is always kept.
"""

from __future__ import annotations

ARCHIVE_TEMPLATE = """<div class="plants-archive-wrapper">
<div class="plants-archive" data-count="{count}">
{cards}
</div>
<div class="plants-pagination">{pagination}</div>
</div>"""

CARD_TEMPLATE = """<div class="plant-card" data-plant-id="{id}">
{body}
</div>"""

CARD_BODY_TEMPLATE = """  <div class="plant-image"><img src="{feature_image}" alt="{alt}" loading="lazy"></div>
  <div class="plant-image-placeholder">{image_placeholder}</div>
  <div class="plant-names">
    <h3 class="plant-name-en">{name_en}</h3>
    <p class="plant-name-latin">{name_latin}</p>
    <p class="plant-name-halq">{name_halq}</p>
  </div>
  <div class="plant-soundbite"><audio controls preload="none"><source src="{soundbite}" type="audio/mpeg">Your browser does not support the audio element.</audio></div>"""

PREVIOUS_LINK_TEMPLATE = '<a class="plants-page-prev" href="{url}">&larr; Previous</a>'
NEXT_LINK_TEMPLATE = '<a class="plants-page-next" href="{url}">Next &rarr;</a>'

EMPTY_TEMPLATE = '<div class="plants-no-results">No plants found matching your criteria.</div>'
ERROR_TEMPLATE = '<div class="plants-error">Error loading plants: {message}</div>'

TEXT_FIELD_TEMPLATE = '<span class="plant-field plant-field-{key}">{value}</span>'
LIST_FIELD_TEMPLATE = '<ul class="plant-field plant-field-{key}">{items}</ul>'
DATE_FIELD_TEMPLATE = '<time class="plant-field plant-field-{key}" datetime="{iso}">{value}</time>'
LINK_FIELD_TEMPLATE = '<a class="plant-field plant-field-{key}" href="{url}">{value}</a>'
IMAGE_FIELD_TEMPLATE = '<img class="plant-field plant-field-{key}" src="{url}" alt="{alt}" loading="lazy">'
AUDIO_FIELD_TEMPLATE = (
    '<audio class="plant-field plant-field-{key}" controls preload="none">'
    '<source src="{url}" type="{mime}">Your browser does not support the audio element.</audio>'
)
