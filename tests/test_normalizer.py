import copy

import pytest

from schema2swagger.normalizer import convert, is_to_json_coercion


class TestTypeCoercion:
    def test_nullable_union_oas3(self):
        assert convert({"type": ["string", "null"]}, 3) == {"type": "string", "nullable": True}

    def test_nullable_union_oas2(self):
        assert convert({"type": ["string", "null"]}, 2) == {"type": "string"}

    def test_null_first_in_union(self):
        assert convert({"type": ["null", "integer"]}, 3) == {"type": "integer", "nullable": True}

    def test_multi_type_falls_back_to_string(self):
        assert convert({"type": ["string", "integer"]}, 2) == {"type": "string"}
        assert convert({"type": ["string", "integer"]}, 3) == {"type": "string"}

    def test_three_types_with_null_fall_back_to_string(self):
        result = convert({"type": ["string", "integer", "null"]}, 3)
        assert result == {"type": "string"}

    def test_only_null_type(self):
        assert convert({"type": ["null"]}, 2) == {"type": "null"}

    def test_only_null_type_oas3(self):
        assert convert({"type": ["null"]}, 3) == {"type": "null", "nullable": True}

    def test_single_string_type_untouched(self):
        assert convert({"type": "integer", "minimum": 1}, 3) == {"type": "integer", "minimum": 1}


class TestDescription:
    def test_desc_moves_to_description(self):
        assert convert({"type": "string", "$desc": "user name"}) == {
            "type": "string",
            "description": "user name",
        }

    def test_non_string_desc_is_kept(self):
        assert convert({"$desc": {"en": "x"}}) == {"$desc": {"en": "x"}}

    def test_nested_desc(self):
        schema = {
            "type": "object",
            "properties": {
                "username": {"type": "string", "$desc": "public user identifier"},
                "collection": {
                    "type": "array",
                    "$desc": "array description",
                    "items": {"type": "integer", "$desc": "array item description"},
                },
            },
        }
        assert convert(schema) == {
            "type": "object",
            "properties": {
                "username": {"type": "string", "description": "public user identifier"},
                "collection": {
                    "type": "array",
                    "description": "array description",
                    "items": {"type": "integer", "description": "array item description"},
                },
            },
        }


class TestCompositionFolding:
    def _schema(self, keyword):
        return {
            "type": "object",
            "properties": {"username": {"type": "string"}},
            keyword: [
                {"properties": {"email": {"type": "string"}}},
                {"properties": {"tel": {"type": "string"}}},
            ],
        }

    def test_one_of_merged_oas2(self):
        result = convert(self._schema("oneOf"), 2)
        assert "oneOf" not in result
        assert list(result["properties"]) == ["username", "email", "tel"]

    def test_any_of_merged_oas2(self):
        result = convert(self._schema("anyOf"), 2)
        assert result == {
            "type": "object",
            "properties": {
                "username": {"type": "string"},
                "email": {"type": "string"},
                "tel": {"type": "string"},
            },
        }

    def test_later_branch_wins(self):
        schema = {"oneOf": [{"type": "string", "maxLength": 5}, {"maxLength": 10}]}
        assert convert(schema, 2) == {"type": "string", "maxLength": 10}

    def test_one_of_kept_oas3(self):
        schema = self._schema("oneOf")
        assert convert(schema, 3)["oneOf"] == schema["oneOf"]

    def test_merged_branches_are_normalized(self):
        schema = {"anyOf": [{"properties": {"age": {"type": ["integer", "null"]}}}]}
        assert convert(schema, 2) == {"properties": {"age": {"type": "integer"}}}

    def test_branch_type_list_and_desc_normalized(self):
        result = convert({"oneOf": [{"type": ["string", "null"], "$desc": "x"}]}, 2)
        assert result == {"type": "string", "description": "x"}
        assert convert(result, 2) == result

    def test_any_of_branch_multi_type_normalized(self):
        schema = {"anyOf": [{"type": "integer"}, {"type": ["integer", "string"]}]}
        assert convert(schema, 2) == {"type": "string"}

    def test_to_json_target_type_list_and_desc_normalized(self):
        schema = {"allOf": [{"$toJSON": {}}, {"type": ["integer", "string"], "$desc": "d"}]}
        result = convert(schema, 2)
        assert result == {"type": "string", "description": "d"}
        assert convert(result, 2) == result

    def test_to_json_all_of_is_unwrapped(self):
        schema = {
            "type": "object",
            "required": ["prop"],
            "properties": {
                "prop": {
                    "allOf": [
                        {"$toJSON": {}},
                        {
                            "type": "object",
                            "required": ["json"],
                            "properties": {"json": {"type": "boolean"}},
                        },
                    ]
                }
            },
        }
        assert convert(schema, 2) == {
            "type": "object",
            "required": ["prop"],
            "properties": {
                "prop": {
                    "type": "object",
                    "required": ["json"],
                    "properties": {"json": {"type": "boolean"}},
                }
            },
        }

    def test_other_all_of_untouched(self):
        schema = {"allOf": [{"type": "string"}, {"maxLength": 3}]}
        assert convert(schema, 2) == schema

    def test_is_to_json_coercion(self):
        assert is_to_json_coercion([{"$toJSON": {}}, {"type": "string"}])
        assert not is_to_json_coercion([{"$toJSON": {}, "type": "string"}, {}])
        assert not is_to_json_coercion([{"$toJSON": {}}])
        assert not is_to_json_coercion([{"$toJSON": {}}, {}, {}])
        assert not is_to_json_coercion({"$toJSON": {}})


class TestRecursion:
    def test_recurses_into_all_child_keywords(self):
        schema = {
            "type": "object",
            "patternProperties": {"^x-": {"type": ["string", "null"]}},
            "additionalProperties": {"type": ["number", "null"]},
            "items": {"type": ["boolean", "null"]},
            "additionalItems": {"$desc": "extra"},
        }
        assert convert(schema, 3) == {
            "type": "object",
            "patternProperties": {"^x-": {"type": "string", "nullable": True}},
            "additionalProperties": {"type": "number", "nullable": True},
            "items": {"type": "boolean", "nullable": True},
            "additionalItems": {"description": "extra"},
        }

    def test_booleans_pass_through(self):
        schema = {"type": "object", "additionalProperties": False, "additionalItems": True}
        assert convert(schema) == schema

    def test_unknown_keywords_pass_through(self):
        schema = {"type": "string", "x-internal": {"type": ["a", "b"]}, "format": "email"}
        assert convert(schema) == schema


class TestNormalizationContract:
    def test_none_is_empty_schema(self):
        assert convert(None) == {}

    def test_input_not_mutated(self):
        schema = {
            "type": "object",
            "properties": {
                "name": {"type": ["string", "null"], "$desc": "name"},
                "tags": {"type": "array", "items": {"type": ["string", "integer"]}},
            },
            "oneOf": [{"properties": {"email": {"type": "string"}}}],
        }
        original = copy.deepcopy(schema)
        convert(schema, 2)
        convert(schema, 3)
        assert schema == original

    def test_result_shares_nothing_with_input(self):
        schema = {"type": "object", "required": ["a"], "properties": {"a": {"enum": [1, 2]}}}
        result = convert(schema)
        result["required"].append("b")
        result["properties"]["a"]["enum"].append(3)
        assert schema == {"type": "object", "required": ["a"], "properties": {"a": {"enum": [1, 2]}}}

    def test_idempotent(self):
        schema = {
            "type": "object",
            "$desc": "user",
            "properties": {
                "name": {"type": ["string", "null"]},
                "id": {"type": ["string", "integer"]},
                "prop": {"allOf": [{"$toJSON": {}}, {"type": "boolean"}]},
            },
            "anyOf": [{"properties": {"tel": {"type": "string"}}}],
        }
        for oas in (2, 3):
            once = convert(schema, oas)
            assert convert(once, oas) == once

    def test_default_oas_from_settings(self, monkeypatch):
        monkeypatch.setenv("SCHEMA2SWAGGER_DEFAULT_OAS", "3")
        assert convert({"type": ["string", "null"]}) == {"type": "string", "nullable": True}

    @pytest.mark.parametrize("oas", [0, 1, 4, "3"])
    def test_unsupported_oas_rejected(self, oas):
        with pytest.raises(ValueError, match="Unsupported OpenAPI version"):
            convert({"type": "string"}, oas)
