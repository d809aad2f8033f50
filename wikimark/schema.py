from typing import Any, Dict, List

REQUIRED_BINDING_FIELDS = ["item", "itemLabel", "itemDescription", "website"]
OPTIONAL_BINDING_FIELDS = ["rank", "endDate"]


def _is_term(v: Any) -> bool:
    return isinstance(v, dict) and isinstance(v.get("value"), str)


def validate_binding(binding: Any) -> List[str]:
    """
    Returns a list of validation error messages for one result row.
    Every term must be a SPARQL JSON term object with a string "value".
    """
    if not isinstance(binding, dict):
        return ["Binding must be an object"]

    errors: List[str] = []
    for f in REQUIRED_BINDING_FIELDS:
        if f not in binding:
            errors.append(f"Missing required field: {f}")
        elif not _is_term(binding[f]):
            errors.append(f"Field '{f}' must be a term with a string value")

    for f in OPTIONAL_BINDING_FIELDS:
        if f in binding and not _is_term(binding[f]):
            errors.append(f"Field '{f}' must be a term with a string value if provided")

    return errors


def validate_response(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages for a SPARQL JSON results
    payload. Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Response must be a JSON object"]

    results = data.get("results")
    if not isinstance(results, dict):
        return ["Missing required field: results"]

    bindings = results.get("bindings")
    if not isinstance(bindings, list):
        return ["Field 'results.bindings' must be a list"]

    errors: List[str] = []
    for i, binding in enumerate(bindings):
        for e in validate_binding(binding):
            errors.append(f"Row {i}: {e}")
    return errors
