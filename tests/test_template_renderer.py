"""Tests for template placeholder substitution."""

from bidtracker.services.template_renderer import (
    MessageTemplate,
    TemplateRenderer,
    TemplateVariables,
)

renderer = TemplateRenderer()
variables = TemplateVariables(
    client="Ana",
    bid_title="Road maintenance",
    link="https://crm.example.com/portal/tok?id=7",
    sender_name="Bid Desk",
)


def test_known_tokens_are_replaced():
    message = renderer.render(
        MessageTemplate(
            subject="Bid {{BID}}",
            body="Hello {{CLIENT}}, decide here: {{LINK}}. {{SENDER}}",
        ),
        variables,
    )

    assert message.subject == "Bid Road maintenance"
    assert message.body == (
        "Hello Ana, decide here: https://crm.example.com/portal/tok?id=7. Bid Desk"
    )


def test_every_occurrence_is_replaced():
    body = renderer.substitute("{{CLIENT}} / {{CLIENT}}", variables.as_tokens())
    assert body == "Ana / Ana"


def test_unknown_tokens_are_left_verbatim():
    body = renderer.substitute("Deadline {{DEADLINE}} for {{BID}}", variables.as_tokens())
    assert body == "Deadline {{DEADLINE}} for Road maintenance"


def test_tokens_tolerate_spacing_and_case():
    body = renderer.substitute("{{ client }} {{Bid}}", variables.as_tokens())
    assert body == "Ana Road maintenance"


def test_empty_link_renders_empty():
    message = renderer.render(
        MessageTemplate(subject="  {{BID}}  ", body="Link: {{LINK}}"),
        TemplateVariables(client="Ana", bid_title="X"),
    )
    assert message.subject == "X"
    assert message.body == "Link: "
