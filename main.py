import argparse
from os import stat
from typing import NamedTuple

import bitmap
from pixels import PixelBuffer
from quadtree import (QuadNode, Region, build, compress, count_leaves,
                      count_nodes, is_valid_region, reconstruct, split)


# Nodes deeper than this are merged regardless of how similar they are.
MAX_LEVEL = 5

# The colour of the partition lines drawn by [render_partition].
OUTLINE_COLOUR = 0x000000


class CompressionResult(NamedTuple):
    width: int
    height: int
    nodes_before: int
    nodes_after: int
    leaves_before: int
    leaves_after: int
    input_size: int
    output_size: int


def compress_file(input_path, output_path, max_level: int | None = MAX_LEVEL,
                  partition_path=None) -> CompressionResult:
    """
    Runs the whole pipeline on a bitmap file:
        decode -> build -> compress -> reconstruct -> encode.
    If [partition_path] is given, the compressed partition
        is written there as well.
    """
    print(f"Start {input_path}")

    # An unreadable input fails here, before any tree is built.
    width, height, bytes_per_pixel, buffer = bitmap.decode(input_path)
    # Taken now, as the output may overwrite the input.
    input_size = stat(input_path).st_size
    print("Image size: ", (width, height))

    root = build(buffer)
    assert root is not None

    nodes_before = count_nodes(root)
    leaves_before = count_leaves(root)
    print(f"QuadTree building finished: {nodes_before} nodes, {leaves_before} leaves")

    compress(root, max_level)

    nodes_after = count_nodes(root)
    leaves_after = count_leaves(root)
    print(f"QuadTree compression finished: {nodes_after} nodes, {leaves_after} leaves")

    output = reconstruct(root, width, height)
    bitmap.encode(output_path, output, width, height, bytes_per_pixel)

    if partition_path is not None:
        partition = render_partition(root, width, height)
        bitmap.encode(partition_path, partition, width, height, bytes_per_pixel)
        print(f"Partition written to {partition_path}")

    root.release()

    # Compare the disk-size of the original image and the output image.
    output_size = stat(output_path).st_size

    print(f"Original size: {input_size} bytes")
    print(f"Decompressed size: {output_size} bytes")
    print(f"End {input_path}")

    return CompressionResult(
        width=width,
        height=height,
        nodes_before=nodes_before,
        nodes_after=nodes_after,
        leaves_before=leaves_before,
        leaves_after=leaves_after,
        input_size=input_size,
        output_size=output_size,
    )


def _paint_partition(node: QuadNode | None, region: Region, out: PixelBuffer):
    if node is None or not is_valid_region(*region):
        return

    if not node.is_leaf:
        for child, subregion in zip(node.children, split(*region)):
            _paint_partition(child, subregion, out)
        return

    tl_x, tl_y, br_x, br_y = region
    out.fill(tl_x, tl_y, br_x, br_y, node.colour)

    # Outline the right and bottom edges, so neighbouring leaves
    #   share a single line between them.
    out.fill(br_x, tl_y, br_x, br_y, OUTLINE_COLOUR)
    out.fill(tl_x, br_y, br_x, br_y, OUTLINE_COLOUR)


def render_partition(root: QuadNode | None, width: int, height: int) -> PixelBuffer:
    """
    Draws the leaves of the tree with their borders outlined,
        to visualise how the image was partitioned.
    """
    output = PixelBuffer.blank(width, height)
    _paint_partition(root, output.full_region(), output)

    return output


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Compress a 24-bit bitmap with a QuadTree")

    parser.add_argument("input", help="Bitmap to compress")
    parser.add_argument("output", help="Where to write the decompressed bitmap")

    parser.add_argument("--max-level", type=int, default=MAX_LEVEL,
                        help="Level beyond which leaves are always merged")

    parser.add_argument("--partition", default=None,
                        help="Optionally write the compressed partition here")

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    return compress_file(args.input, args.output,
                         max_level=args.max_level,
                         partition_path=args.partition)


# Runner Code
if __name__ == "__main__":
    main()
