"""
Balanced Tree Demo -- Rotation cases, height against the AVL bound, rotation
statistics per insertion pattern, deletion behavior, and DOT export.

Generates:
- viz/*.png -- Individual visualization files
- viz/tree.dot -- Graphviz description of a sample tree
- report.pdf -- Comprehensive PDF report
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from balanced_tree import BalancedTree
from dot_export import write_dot

SEED = 42
np.random.seed(SEED)

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)

COLORS = {
    "blue": "#3498db",
    "red": "#e74c3c",
    "orange": "#f39c12",
    "green": "#27ae60",
    "purple": "#9b59b6",
    "dark": "#2c3e50",
}

ROTATION_KINDS = ["left", "right", "right_left", "left_right"]
SIZES = [2 ** k - 1 for k in range(2, 14)]


def build(keys):
    tree: BalancedTree[int] = BalancedTree()
    for k in keys:
        tree.insert(int(k))
    return tree


def draw_tree(ax, tree, title=""):
    """Plot nodes at (in-order rank, -depth) with parent-child edges."""
    ax.set_title(title)
    ax.axis("off")
    if tree.is_empty():
        return

    rank = {key: i for i, key in enumerate(tree.in_order())}
    stack = [(tree.root(), 0)]
    while stack:
        node, depth = stack.pop()
        x, y = rank[node.key], -depth
        for child in (node.left, node.right):
            if child is not None:
                ax.plot([x, rank[child.key]], [y, y - 1], color=COLORS["dark"], linewidth=1, zorder=1)
                stack.append((child, depth + 1))
        ax.scatter([x], [y], s=600, color=COLORS["blue"], edgecolors=COLORS["dark"], zorder=2)
        ax.text(x, y, str(node.key), ha="center", va="center", color="white", fontsize=9, zorder=3)
    ax.set_xlim(-1, tree.size())
    ax.set_ylim(-tree.height() - 1, 1)


# ---------------------------------------------------------------------------
# Example 1: The Four Rotation Cases
# ---------------------------------------------------------------------------
def example_1_rotation_cases():
    """Insert three keys in each order that forces one kind of rotation."""
    print("=" * 60)
    print("Example 1: The Four Rotation Cases")
    print("=" * 60)

    cases = [
        ("left", [10, 20, 30]),
        ("right", [30, 20, 10]),
        ("right_left", [10, 30, 20]),
        ("left_right", [30, 10, 20]),
    ]

    fig, axes = plt.subplots(1, 4, figsize=(16, 4))
    for ax, (kind, keys) in zip(axes, cases):
        tree = build(keys)
        counts = tree.rotation_counts()
        print(f"  insert {keys} -> root {tree.root().key}, "
              f"pre-order {tree.pre_order()}, {kind} rotations: {counts[kind]}")
        draw_tree(ax, tree, f"{kind} rotation\ninsert {keys}")

    fig.suptitle("Each insertion order triggers exactly one rotation", fontweight="bold")
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_rotation_cases.png", dpi=150)
    plt.close(fig)
    return fig


# ---------------------------------------------------------------------------
# Example 2: Height Against the AVL Bound
# ---------------------------------------------------------------------------
def example_2_height_bound():
    """Compare tree height for sorted and random insertion orders."""
    print("\n" + "=" * 60)
    print("Example 2: Height Against the AVL Bound")
    print("=" * 60)

    sizes = np.array(SIZES)
    sorted_heights = []
    random_heights = []
    for n in sizes:
        sorted_heights.append(build(np.arange(n)).height())
        random_heights.append(build(np.random.permutation(n)).height())
        print(f"  n={n:5d}  sorted={sorted_heights[-1]:2d}  random={random_heights[-1]:2d}")

    upper = 1.44 * np.log2(sizes + 2) - 1
    lower = np.ceil(np.log2(sizes + 1)) - 1

    fig, ax = plt.subplots(figsize=(9, 6))
    ax.plot(sizes, sorted_heights, "o-", color=COLORS["blue"], label="Sorted insertion")
    ax.plot(sizes, random_heights, "s-", color=COLORS["orange"], label="Random insertion")
    ax.plot(sizes, upper, "--", color=COLORS["red"], label="AVL bound 1.44 log2(n+2) - 1")
    ax.plot(sizes, lower, ":", color=COLORS["green"], label="Perfect tree log2(n+1) - 1")
    ax.set_xscale("log", base=2)
    ax.set_xlabel("Number of keys")
    ax.set_ylabel("Height (edges)")
    ax.set_title("Height stays logarithmic for any insertion order")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_height_bound.png", dpi=150)
    plt.close(fig)
    return fig


# ---------------------------------------------------------------------------
# Example 3: Rotation Counts per Insertion Pattern
# ---------------------------------------------------------------------------
def example_3_rotation_counts():
    """Count each rotation kind for several insertion patterns."""
    print("\n" + "=" * 60)
    print("Example 3: Rotation Counts per Insertion Pattern")
    print("=" * 60)

    n = 1023
    half = np.arange(n // 2)
    zigzag = np.empty(2 * len(half), dtype=int)
    zigzag[0::2] = half
    zigzag[1::2] = n - 1 - half
    patterns = {
        "sorted": np.arange(n),
        "reversed": np.arange(n)[::-1],
        "random": np.random.permutation(n),
        "zigzag": zigzag,
    }

    counts = {}
    for name, keys in patterns.items():
        counts[name] = build(keys).rotation_counts()
        summary = ", ".join(f"{k}={counts[name][k]}" for k in ROTATION_KINDS)
        print(f"  {name:9s} {summary}")

    fig, ax = plt.subplots(figsize=(10, 6))
    width = 0.2
    x = np.arange(len(patterns))
    palette = [COLORS["blue"], COLORS["red"], COLORS["orange"], COLORS["purple"]]
    for i, kind in enumerate(ROTATION_KINDS):
        values = [counts[name][kind] for name in patterns]
        ax.bar(x + (i - 1.5) * width, values, width, label=kind, color=palette[i])
    ax.set_xticks(x)
    ax.set_xticklabels(list(patterns))
    ax.set_ylabel("Rotations")
    ax.set_title(f"Rotations fired while inserting {n} keys")
    ax.legend()
    ax.grid(True, axis="y", alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_rotation_counts.png", dpi=150)
    plt.close(fig)
    return fig


# ---------------------------------------------------------------------------
# Example 4: Deletion
# ---------------------------------------------------------------------------
def example_4_deletion():
    """Track height and rotations while draining a random tree."""
    print("\n" + "=" * 60)
    print("Example 4: Deletion")
    print("=" * 60)

    n = 2047
    keys = np.random.permutation(n)
    tree = build(keys)
    inserted_rotations = sum(tree.rotation_counts().values())

    sizes, heights = [], []
    for key in np.random.permutation(keys):
        sizes.append(tree.size())
        heights.append(tree.height())
        tree.remove(int(key))
    removal_rotations = sum(tree.rotation_counts().values()) - inserted_rotations

    print(f"  rotations during {n} inserts: {inserted_rotations}")
    print(f"  rotations during {n} removals: {removal_rotations}")
    print(f"  tree empty after drain: {tree.is_empty()}")

    sizes = np.array(sizes)
    fig, ax = plt.subplots(figsize=(9, 6))
    ax.plot(sizes, heights, color=COLORS["purple"], label="Height while draining")
    ax.plot(sizes, 1.44 * np.log2(sizes + 2) - 1, "--", color=COLORS["red"], label="AVL bound")
    ax.invert_xaxis()
    ax.set_xlabel("Keys remaining")
    ax.set_ylabel("Height (edges)")
    ax.set_title("Removals keep the tree within the AVL bound")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "04_deletion.png", dpi=150)
    plt.close(fig)
    return fig


# ---------------------------------------------------------------------------
# Example 5: Traversals and DOT Export
# ---------------------------------------------------------------------------
def example_5_traversals_and_dot():
    """Print every traversal of a small tree and export it as DOT."""
    print("\n" + "=" * 60)
    print("Example 5: Traversals and DOT Export")
    print("=" * 60)

    tree = build(np.random.choice(100, size=15, replace=False))
    print(f"  pre-order:   {tree.pre_order()}")
    print(f"  in-order:    {tree.in_order()}")
    print(f"  post-order:  {tree.post_order()}")
    print(f"  level-order: {tree.level_order()}")
    print(f"  minimum: {tree.minimum()}  maximum: {tree.maximum()}")

    dot_path = write_dot(tree, VIZ_DIR / "tree.dot")
    print(f"  DOT written to {dot_path.relative_to(VIZ_DIR.parent)}")

    fig, ax = plt.subplots(figsize=(12, 5))
    draw_tree(ax, tree, "Sample tree (same shape as viz/tree.dot)")
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "05_sample_tree.png", dpi=150)
    plt.close(fig)
    return fig


def generate_pdf_report(figures_data):
    """Generate comprehensive PDF report."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    pdf_path = VIZ_DIR.parent / "report.pdf"

    with PdfPages(pdf_path) as pdf:
        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.6, "Balanced Tree", fontsize=36, ha="center", fontweight="bold")
        fig.text(0.5, 0.5, "AVL Rotations, Height and Deletion", fontsize=24, ha="center")
        fig.text(0.5, 0.35, "Demonstration & Analysis Report", fontsize=18, ha="center", style="italic")
        fig.text(0.5, 0.2, f"Seed: {SEED}", fontsize=12, ha="center", color="gray")
        pdf.savefig(fig)
        plt.close(fig)

        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.95, "Summary", fontsize=24, ha="center", fontweight="bold")

        summary_text = """
This report exercises a height-balanced binary search tree that keeps
parent pointers and retraces only the path from a change to the root.

• Balancing:
  - Balance factor = height(right) - height(left), leaves have height 0
  - Single left/right rotations for outer imbalance
  - Right-left / left-right double rotations for inner imbalance

• Operations:
  - insert (duplicates rejected), remove (successor copy on two children)
  - contains, minimum, maximum, size, clear
  - pre-, in-, post- and level-order traversals
  - Graphviz DOT export

Key Findings:
  1. Sorted input is the best case for height, not the worst
  2. Random input stays well under the 1.44 log2(n) bound
  3. Draining the tree key by key never breaks the same bound
"""
        fig.text(0.1, 0.85, summary_text, fontsize=12, ha="left", va="top",
                 fontfamily="monospace", linespacing=1.5)
        pdf.savefig(fig)
        plt.close(fig)

        for title, filename in figures_data:
            fig = plt.figure(figsize=(11, 8.5))
            fig.text(0.5, 0.98, title, fontsize=14, ha="center", fontweight="bold")
            img = plt.imread(VIZ_DIR / filename)
            ax = fig.add_axes([0.05, 0.05, 0.9, 0.88])
            ax.imshow(img)
            ax.axis("off")
            pdf.savefig(fig)
            plt.close(fig)

    print(f"PDF report saved to: {pdf_path}")
    return pdf_path


def main():
    print("\n" + "=" * 60)
    print("BALANCED TREE DEMO")
    print("=" * 60 + "\n")

    example_1_rotation_cases()
    example_2_height_bound()
    example_3_rotation_counts()
    example_4_deletion()
    example_5_traversals_and_dot()

    generate_pdf_report([
        ("Example 1: Rotation Cases", "01_rotation_cases.png"),
        ("Example 2: Height Bound", "02_height_bound.png"),
        ("Example 3: Rotation Counts", "03_rotation_counts.png"),
        ("Example 4: Deletion", "04_deletion.png"),
        ("Example 5: Sample Tree", "05_sample_tree.png"),
    ])

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)
    print(f"\nGenerated files:")
    for f in sorted(VIZ_DIR.glob("*")):
        print(f"  - {f.relative_to(VIZ_DIR.parent)}")
    print(f"  - report.pdf")


if __name__ == "__main__":
    main()
