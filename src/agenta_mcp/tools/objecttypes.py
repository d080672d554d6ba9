from __future__ import annotations

from typing import Annotated, Any, Dict, Optional, Union

from pydantic import Field

from .dispatch_helpers import invoke

ObjectType = Annotated[
    Optional[Union[str, int]],
    Field(description="The objecttype (e.g., -54346245)", examples=["-54346245"]),
]


async def get_objecttypes() -> str:
    """Load list of all objecttype definitions from aB-Agenta"""
    return await invoke("get_objecttypes", {})


async def filter_objecttypes(
    filter: Annotated[
        Optional[Dict[str, Any]],
        Field(description="Filter criteria in MongoDB-like query format (e.g., {'name': {'$endsWith': 'daten'}})"),
    ] = None,
) -> str:
    """Load list of objecttype definitions according to a filter from aB-Agenta"""
    return await invoke("filter_objecttypes", dict(locals()))


async def get_objecttype(objecttype: ObjectType = None) -> str:
    """Load a single objecttype definition from aB-Agenta"""
    return await invoke("get_objecttype", dict(locals()))


async def get_properties(objecttype: ObjectType = None) -> str:
    """Load list of property definitions for an objecttype from aB-Agenta

    Each property carries its name, the field it is bound on, its data type
    and, for references, the list it points to.
    """
    return await invoke("get_properties", dict(locals()))
