from math import sqrt


# Two leaves are similar when their normalized distance is below this.
SIMILARITY_THRESHOLD = 0.15

# The distance between black and white.
MAX_DISTANCE = sqrt(255 ** 2 * 3)


def pack_rgb(r: int, g: int, b: int) -> int:
    if not all(0 <= channel <= 255 for channel in (r, g, b)):
        raise ValueError(f"Channels must be within 0..255, got {(r, g, b)}")

    return r | g << 8 | b << 16


def unpack_rgb(colour: int) -> tuple[int, int, int]:
    return (colour & 0xFF, (colour >> 8) & 0xFF, (colour >> 16) & 0xFF)


def colour_distance(colour1: int, colour2: int) -> float:
    """
    Computes the Euclidean distance between two packed colours
        in RGB space, normalized to [0, 1] by [MAX_DISTANCE].
    """
    r1, g1, b1 = unpack_rgb(colour1)
    r2, g2, b2 = unpack_rgb(colour2)

    d = sqrt((r2 - r1) ** 2 + (g2 - g1) ** 2 + (b2 - b1) ** 2)

    return d / MAX_DISTANCE


def weighted_distance(colour1: int, colour2: int) -> float:
    """
    The "redmean" approximation of perceived colour distance.
    Red and blue are weighted by how red the pair is on average.
    This metric does not take part in merge decisions.
    """
    r1, g1, b1 = unpack_rgb(colour1)
    r2, g2, b2 = unpack_rgb(colour2)

    rmean = (r1 + r2) // 2
    r = r1 - r2
    g = g1 - g2
    b = b1 - b2

    return sqrt((((512 + rmean) * r * r) >> 8)
                + 4 * g * g
                + (((767 - rmean) * b * b) >> 8))


def is_similar(node1, node2) -> bool:
    # A missing node (at an odd image edge) never blocks a merge.
    if node1 is None or node2 is None:
        return True

    return colour_distance(node1.colour, node2.colour) < SIMILARITY_THRESHOLD


def average_colour(nodes) -> int:
    """
    Floor-averages each channel over the nodes that are present.
    """
    r, g, b = 0, 0, 0
    count = 0

    for node in nodes:
        if node is None:
            continue

        r_, g_, b_ = unpack_rgb(node.colour)
        r += r_
        g += g_
        b += b_
        count += 1

    if count == 0:
        raise ValueError("Cannot average the colour of zero nodes")

    return pack_rgb(r // count, g // count, b // count)
