import json


def test_wrap_schema_builds_response_format():
    from schemachat.llm._schema import wrap_schema

    schema = {"type": "object", "properties": {"a": {"type": "integer"}}}
    descriptor = wrap_schema(schema, strict=False)

    assert descriptor.name == "LlmResponseSchema"
    assert descriptor.kind == "json_schema"
    assert descriptor.schema is schema
    assert descriptor.to_response_format() == {
        "type": "json_schema",
        "json_schema": {
            "name": "LlmResponseSchema",
            "schema": schema,
            "strict": False,
        },
    }
    assert wrap_schema(schema, strict=True).to_response_format()["json_schema"][
        "strict"
    ]


def test_wrap_schema_does_not_validate_schema():
    from schemachat.llm._schema import wrap_schema

    bogus = {"type": "not-a-real-type", "whatever": [1, 2]}
    assert wrap_schema(bogus, strict=True).schema == bogus


def test_augment_prompt_contains_prompt_fences_and_schema():
    from schemachat.llm._schema import augment_prompt

    prompt = "List three colours."
    schema = {"type": "array", "items": {"type": "string"}}

    out = augment_prompt(prompt, schema)

    assert out.startswith(prompt)
    assert "```json" in out
    assert out.count("```") >= 2
    assert json.dumps(schema) in out


def test_augment_prompt_with_empty_prompt():
    from schemachat.llm._schema import augment_prompt

    out = augment_prompt("", {})
    assert "```json" in out
    assert out.endswith("{}")


def test_wrapper_and_augmenter_are_idempotent():
    from schemachat.llm._schema import augment_prompt, wrap_schema

    schema = {"type": "object", "required": ["x"], "properties": {"x": {}}}

    assert augment_prompt("p", schema) == augment_prompt("p", schema)
    assert wrap_schema(schema, strict=False) == wrap_schema(schema, strict=False)
    assert json.dumps(
        wrap_schema(schema, strict=True).to_response_format()
    ) == json.dumps(wrap_schema(schema, strict=True).to_response_format())


def test_message_to_dict():
    from schemachat.llm.types import Message

    assert Message(role="user", content="hi").to_dict() == {
        "role": "user",
        "content": "hi",
    }
