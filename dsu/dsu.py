from typing import List


class DisjointSetUnion:
    """
    Union-find over the elements 0..size-1.

    ``_parent_or_size[v]`` is the parent of v when non-negative; for a
    leader it is the negated size of its group.
    """

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self.size = size
        self._parent_or_size = [-1] * size

    def find(self, v: int) -> int:
        """Leader of the group containing v."""
        root = v
        while self._parent_or_size[root] >= 0:
            root = self._parent_or_size[root]
        # path compression
        while v != root:
            self._parent_or_size[v], v = root, self._parent_or_size[v]
        return root

    def union(self, u: int, v: int) -> int:
        """Merge the groups of u and v and return the new leader."""
        u, v = self.find(u), self.find(v)
        if u == v:
            return u
        if -self._parent_or_size[u] < -self._parent_or_size[v]:
            u, v = v, u
        self._parent_or_size[u] += self._parent_or_size[v]
        self._parent_or_size[v] = u
        return u

    def connected(self, u: int, v: int) -> bool:
        return self.find(u) == self.find(v)

    def group_size(self, v: int) -> int:
        return -self._parent_or_size[self.find(v)]

    def groups(self) -> List[List[int]]:
        members = [[] for _ in range(self.size)]
        for v in range(self.size):
            members[self.find(v)].append(v)
        return [group for group in members if group]
