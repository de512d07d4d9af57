class RuleEngine:
    """
    Applies a collection of rules to a flat list of AST nodes
    and collects the analysis events they emit.
    """

    def __init__(self, rules):
        self.rules = rules

    def run(self, nodes):
        events = []

        for node in nodes:
            for rule in self.rules:
                # Check if the rule applies to this node
                if rule.matches(node):
                    result = rule.apply(node)

                    # Rules return None when the node carries no usable fact
                    if result:
                        events.extend(e for e in result if e is not None)

        for rule in self.rules:
            if hasattr(rule, "finalize"):
                events.extend(e for e in rule.finalize() or [] if e is not None)

        return events
