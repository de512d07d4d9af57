class ClassHierarchyIndex:
    """
    Subclass -> superclass lookup for Objective-C interfaces (single inheritance).
    """

    def __init__(self):
        self._superclass = {}

    def record(self, subclass, superclass):
        if not subclass or not superclass:
            return
        self._superclass[subclass] = superclass

    def superclass_of(self, class_name):
        return self._superclass.get(class_name)

    def is_same_or_subclass(self, reference, candidate):
        """
        True when `candidate` is `reference` or inherits from it.

        Walks candidate -> superclass -> ... and stops at the first class
        with no recorded superclass. A class seen twice means the recorded
        chain is cyclic; the walk gives up instead of looping.
        """
        visited = set()
        class_name = candidate
        while class_name is not None:
            if class_name == reference:
                return True
            if class_name in visited:
                return False
            visited.add(class_name)
            class_name = self._superclass.get(class_name)
        return False

    def __len__(self):
        return len(self._superclass)
