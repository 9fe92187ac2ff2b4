from enum import StrEnum


class EndpointKind(StrEnum):
    COLLECTION = "collection"
    SINGLE = "single"
