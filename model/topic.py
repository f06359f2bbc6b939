from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Union


@dataclass(frozen=True)
class Topic:
    name: str
    schema_name: str = ""

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "Topic":
        schema = d.get("schemaName", d.get("schema_name", "")) or ""
        return Topic(name=str(d["name"]), schema_name=str(schema))


def topics_with_schema(topics: Optional[Iterable[Union[Topic, Mapping[str, Any]]]], schema_name: str) -> List[Topic]:
    """Topics whose schema name is exactly `schema_name`, in the host's order."""
    out = []
    for t in topics or ():
        topic = t if isinstance(t, Topic) else Topic.from_dict(t)
        if topic.schema_name == schema_name:
            out.append(topic)
    return out
