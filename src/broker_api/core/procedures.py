"""Stored procedure descriptors.

Every database call the API makes is declared here once: the procedure name
and its ordered, typed parameter list. Handlers never write SQL or decide
argument order themselves; they ask a descriptor for its SQL and for the
arguments extracted from a validated request record.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from loguru import logger
from pydantic import BaseModel

from src.broker_api.core.exceptions import ConfigurationError
from src.broker_api.entities import (
    OrderStatus,
    ProductCreate,
    ProductUpdate,
    Violation,
    ViolationCreate,
    ViolationUpdate,
)


@dataclass(frozen=True)
class ProcedureParam:
    name: str
    type: type


@dataclass(frozen=True)
class Procedure:
    """A stored procedure or set-returning function and its positional parameters.

    Attributes:
        name: Database object name
        params: Parameters in the order the procedure declares them
        kind: ``call`` for procedures, ``select`` for set-returning functions
        record: Model the arguments are read from (checked at startup)
        row: Model describing one returned row, for ``select`` procedures
    """

    name: str
    params: tuple[ProcedureParam, ...] = ()
    kind: Literal["call", "select"] = "call"
    record: type[BaseModel] | None = None
    row: type[BaseModel] | None = None

    @property
    def sql(self) -> str:
        placeholders = ", ".join(f":p{i}" for i in range(1, len(self.params) + 1))
        if self.kind == "call":
            return f"CALL {self.name}({placeholders})"
        return f"SELECT * FROM {self.name}({placeholders})"

    def arguments(self, source: BaseModel | Mapping[str, Any] | None = None) -> tuple[Any, ...]:
        """Extract the positional arguments for this procedure.

        Args:
            source: Validated request record or a mapping of parameter values

        Returns:
            Argument values in declared parameter order

        Raises:
            TypeError: If a parameter is missing or has the wrong type
        """
        if isinstance(source, BaseModel):
            values = source.model_dump()
        else:
            values = dict(source or {})

        args = []
        for param in self.params:
            if param.name not in values:
                raise TypeError(f"{self.name}: missing argument {param.name!r}")
            value = values[param.name]
            if type(value) is not param.type:
                raise TypeError(
                    f"{self.name}: argument {param.name!r} must be "
                    f"{param.type.__name__}, got {type(value).__name__}"
                )
            args.append(value)
        return tuple(args)


def _params(*pairs: tuple[str, type]) -> tuple[ProcedureParam, ...]:
    return tuple(ProcedureParam(name, kind) for name, kind in pairs)


INSERT_PRODUCT = Procedure(
    "insert_master_product",
    _params(("category_id", int), ("product_name", str), ("status", int)),
    record=ProductCreate,
)
UPDATE_PRODUCT = Procedure(
    "update_master_product",
    _params(
        ("product_id", int), ("category_id", int), ("product_name", str), ("status", int)
    ),
    record=ProductUpdate,
)
DELETE_PRODUCT = Procedure("delete_master_product", _params(("product_id", int)))

INSERT_VIOLATION = Procedure(
    "insert_master_violation",
    _params(("violation_name", str), ("level_of_serious", str), ("status", int)),
    record=ViolationCreate,
)
UPDATE_VIOLATION = Procedure(
    "update_master_violation",
    _params(
        ("id", int), ("violation_name", str), ("level_of_serious", str), ("status", int)
    ),
    record=ViolationUpdate,
)
DELETE_VIOLATION = Procedure("delete_master_violation", _params(("id", int)))
LIST_VIOLATIONS = Procedure("get_master_violations", kind="select", row=Violation)

LIST_ORDER_STATUSES = Procedure("sp_get_order_status", kind="select", row=OrderStatus)

PROCEDURES: tuple[Procedure, ...] = (
    INSERT_PRODUCT,
    UPDATE_PRODUCT,
    DELETE_PRODUCT,
    INSERT_VIOLATION,
    UPDATE_VIOLATION,
    DELETE_VIOLATION,
    LIST_VIOLATIONS,
    LIST_ORDER_STATUSES,
)


def verify_procedures(procedures: tuple[Procedure, ...] = PROCEDURES) -> None:
    """Check every descriptor against the record model it reads arguments from.

    Raises:
        ConfigurationError: If a parameter is absent from the record model or
            declared with a different type
    """
    problems = []
    for procedure in procedures:
        if procedure.record is None:
            continue
        fields = procedure.record.model_fields
        for param in procedure.params:
            field = fields.get(param.name)
            if field is None:
                problems.append(
                    f"{procedure.name}: {procedure.record.__name__} has no field {param.name!r}"
                )
            elif field.annotation is not param.type:
                problems.append(
                    f"{procedure.name}: {procedure.record.__name__}.{param.name} is "
                    f"{field.annotation}, procedure expects {param.type.__name__}"
                )

    if problems:
        raise ConfigurationError(
            "Stored procedure descriptors do not match request models: "
            + "; ".join(problems)
        )
    logger.debug("Verified {} stored procedure descriptors", len(procedures))
