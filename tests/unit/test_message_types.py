from __future__ import annotations

from schemabuilder.message_types import generate_message_types, is_one_of_candidate
from schemabuilder.runtime.messages import BlobMessage, OneOfMessage, StringArrayMessage
from schemabuilder.typing.models import ClassCollection


def test_generate_message_types_bases_and_defaults(pet_collection: ClassCollection) -> None:
    types = generate_message_types(pet_collection)

    assert issubclass(types["Tags"], StringArrayMessage)
    assert issubclass(types["Raw"], BlobMessage)
    assert issubclass(types["Animal"], OneOfMessage)

    pet = types["Pet"]()
    assert pet.name == ""
    assert pet.weight == 0.0
    assert pet.vaccinated is False
    assert pet.tags is None
    assert pet.nicknames == []
    assert pet.extensions == {}


def test_one_of_candidates_are_not_fields(pet_collection: ClassCollection) -> None:
    animal = pet_collection.get("Animal")
    types = generate_message_types(pet_collection)

    assert all(is_one_of_candidate(pet_collection, animal, prop) for prop in animal.sorted_properties())
    assert set(types["Animal"].model_fields) == {"oneof"}


def test_fields_serialize_under_schema_keys() -> None:
    collection = ClassCollection.model_validate(
        {"classes": {"Ref": {"properties": {"$ref": {"type": "string"}, "class": {"type": "int"}}}}},
    )
    message_type = generate_message_types(collection)["Ref"]

    instance = message_type(ref="#/a", class_=2)

    assert instance.to_document() == {"$ref": "#/a", "class": 2}
    assert message_type.__name__ == "Ref"
    assert message_type.schema_class == "Ref"
