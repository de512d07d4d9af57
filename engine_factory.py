from rule_engine import RuleEngine

from declaration_rules import (
    CategoryRule,
    FunctionRule,
    ImplementationRule,
    InterfaceRule,
    MethodRule,
    ParameterTypeRule,
    PropertyRule,
    TypeDeclarationRule,
    VariableRule,
)
from import_rule import ImportRule
from macro_rule import MacroRule
from message_expr_rule import MessageExprRule
from reference_rules import DeclRefRule, PropertyRefRule, TypeRefRule


ALL_RULE_GROUPS = {"imports", "declarations", "usages", "macros"}


def _normalized_groups(enabled_groups):
    if not enabled_groups:
        return set(ALL_RULE_GROUPS)
    return {g for g in enabled_groups if g in ALL_RULE_GROUPS}


def build_engine(resolver, enabled_groups=None):
    groups = _normalized_groups(enabled_groups)
    rules = []

    if "imports" in groups:
        rules.append(ImportRule(resolver))

    if "declarations" in groups:
        rules.extend(
            [
                InterfaceRule(resolver),
                CategoryRule(resolver),
                TypeDeclarationRule(resolver),
                VariableRule(resolver),
                FunctionRule(resolver),
                PropertyRule(resolver),
                MethodRule(resolver),
            ]
        )

    if "usages" in groups:
        rules.extend(
            [
                ImplementationRule(resolver),
                ParameterTypeRule(resolver),
                DeclRefRule(resolver),
                TypeRefRule(resolver),
                PropertyRefRule(resolver),
                MessageExprRule(resolver),
            ]
        )

    if "macros" in groups:
        rules.append(MacroRule(resolver))

    return RuleEngine(rules)
