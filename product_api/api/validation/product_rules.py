"""Validation rule sets for the product routes."""

from product_api.api.validation.rules import body, is_positive, param, rule_set

ID_NOT_VALID = "ID not valid"


def _product_id():
    return param("id").is_int(ID_NOT_VALID)


def _name():
    return body("name").not_empty("Product name not empty")


def _price():
    return (
        body("price")
        .is_numeric("the value must be a number")
        .not_empty("Price name not empty")
        .custom(is_positive, "Price not valid")
    )


ID_RULES = rule_set(_product_id())

CREATE_RULES = rule_set(_name(), _price())

UPDATE_RULES = rule_set(
    _product_id(),
    _name(),
    _price(),
    body("availability").is_boolean("Availability value not valid"),
)
