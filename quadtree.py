from colours import average_colour, is_similar
from pixels import PixelBuffer


Region = tuple[int, int, int, int]


class QuadNode:
    # The depth of the current node in the QuadTree.
    #   The root is at level 0.
    level: int

    # The packed colour of the region this node covers.
    #   Only meaningful when the node is a leaf.
    colour: int

    # The four children of the current node.
    #   A leaf has all four set to None. An internal node may still
    #   have some of them set to None where the region could not be split.
    tl: "QuadNode | None"
    tr: "QuadNode | None"
    bl: "QuadNode | None"
    br: "QuadNode | None"

    def __init__(self, level=0, colour=0):
        self.level = level
        self.colour = colour
        self.tl = None
        self.tr = None
        self.bl = None
        self.br = None

    @property
    def children(self) -> tuple["QuadNode | None", ...]:
        return (self.tl, self.tr, self.bl, self.br)

    @property
    def is_leaf(self) -> bool:
        return self.tl is None and self.tr is None \
            and self.bl is None and self.br is None

    def release(self):
        """
        Tears down the subtree below this node, children first.
        """
        for child in self.children:
            if child is not None:
                child.release()

        self.tl = None
        self.tr = None
        self.bl = None
        self.br = None

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"QuadNode(level={self.level}, colour={self.colour:#08x})"
        return f"QuadNode(level={self.level}, internal)"


def is_leaf(node: QuadNode | None) -> bool:
    # A missing child behaves like a leaf when deciding whether to merge.
    return node is None or node.is_leaf


def is_valid_region(tl_x: int, tl_y: int, br_x: int, br_y: int) -> bool:
    return tl_x <= br_x and tl_y <= br_y


def split(tl_x: int, tl_y: int, br_x: int, br_y: int) -> list[Region]:
    """
    Splits the inclusive region at its integer midpoint.
    The subregions are returned in (tl, tr, bl, br) order. Some of them
        are empty (tl beyond br) when a side of the region is 1 pixel long.
    """
    mid_x = (tl_x + br_x) // 2
    mid_y = (tl_y + br_y) // 2

    return [
        (tl_x,      tl_y,      mid_x, mid_y),
        (mid_x + 1, tl_y,      br_x,  mid_y),
        (tl_x,      mid_y + 1, mid_x, br_y),
        (mid_x + 1, mid_y + 1, br_x,  br_y),
    ]


def build(buffer: PixelBuffer, region: Region | None = None, level: int = 0) -> QuadNode | None:
    """
    Partitions the region of the buffer into a QuadTree that represents it
        exactly: a leaf for every uniformly coloured region, split otherwise.
    Returns None for an empty region.
    """
    if region is None:
        region = buffer.full_region()

    if not is_valid_region(*region):
        return None

    node = QuadNode()

    uniform, colour = buffer.is_uniform(*region)
    if uniform:
        node.colour = colour
    else:
        node.tl, node.tr, node.bl, node.br = (
            build(buffer, subregion, level + 1)
            for subregion in split(*region)
        )

    node.level = level
    return node


def compress(node: QuadNode | None, max_level: int | None):
    """
    Merges sibling leaves bottom-up, in place.

    A node whose four children are all leaves becomes a leaf itself
        (coloured with their average) when the chained pairs
        (tl, tr), (tr, bl) and (bl, br) are all similar,
        or when the node is deeper than [max_level].
    A node with any internal child is left alone on this pass.
    """
    if node is None or node.is_leaf:
        return

    for child in node.children:
        compress(child, max_level)

    if not all(is_leaf(child) for child in node.children):
        return

    similar = is_similar(node.tl, node.tr) \
        and is_similar(node.tr, node.bl) \
        and is_similar(node.bl, node.br)
    too_deep = max_level is not None and node.level > max_level

    if similar or too_deep:
        node.colour = average_colour(node.children)
        node.release()


def decompress(node: QuadNode | None, region: Region, out: PixelBuffer):
    """
    Paints every leaf of the tree over its region of [out].
    """
    if node is None or not is_valid_region(*region):
        return

    if node.is_leaf:
        out.fill(*region, node.colour)
    else:
        for child, subregion in zip(node.children, split(*region)):
            decompress(child, subregion, out)


def reconstruct(root: QuadNode | None, width: int, height: int) -> PixelBuffer:
    output = PixelBuffer.blank(width, height)
    decompress(root, output.full_region(), output)

    return output


def count_nodes(node: QuadNode | None) -> int:
    if node is None:
        return 0

    return 1 + sum(count_nodes(child) for child in node.children)


def count_leaves(node: QuadNode | None) -> int:
    if node is None:
        return 0
    if node.is_leaf:
        return 1

    return sum(count_leaves(child) for child in node.children)


def tree_depth(node: QuadNode | None) -> int:
    """
    The deepest level reached by any node, or -1 for an empty tree.
    """
    if node is None:
        return -1

    return max([node.level] + [tree_depth(child) for child in node.children])
