"""Sparse tables for the knapsack dynamic programs.

The DP tables are logically (items + 1) x (capacity + 1), which can be far
too large to allocate up front. These tables only store cells that were
actually written and return a default value for every other cell.

- SparseMatrix: row-of-rows dict storage keyed by (row, col)
- SparseArray: one-dimensional view backed by row 0 of a SparseMatrix
- PartitionedSparseMatrix: cells spread over independent fixed-size blocks
"""

DEFAULT_BLOCK_SIZE = 1024


def _check_index(row, col):
    if row < 0 or col < 0:
        raise IndexError(f"negative table index ({row}, {col})")


class SparseMatrix:
    """Two-dimensional table that grows on write and never pre-allocates.

    Unwritten cells read as `default` (0 for the value table, False for
    the decision table). The logical extent is derived from the highest
    row and column ever written; reads never change it.

    Attributes:
        default: Value returned for cells that were never written
        num_rows: Highest row index written + 1
        num_cols: Highest column index written + 1
    """

    def __init__(self, default=0):
        self.default = default
        self._rows = {}
        self._num_rows = 0
        self._num_cols = 0

    @property
    def num_rows(self):
        return self._num_rows

    @property
    def num_cols(self):
        return self._num_cols

    @property
    def cells_written(self):
        """Number of cells physically stored."""
        return sum(len(row) for row in self._rows.values())

    def get(self, row, col):
        """Return the value at (row, col), or the default if never written.

        Raises:
            IndexError: If row or col is negative
        """
        _check_index(row, col)
        cells = self._rows.get(row)
        if cells is None:
            return self.default
        return cells.get(col, self.default)

    def set(self, row, col, value):
        """Store value at (row, col) and widen the logical extent if needed.

        Raises:
            IndexError: If row or col is negative
        """
        _check_index(row, col)
        if self._num_rows <= row:
            self._num_rows = row + 1
        if self._num_cols <= col:
            self._num_cols = col + 1
        cells = self._rows.get(row)
        if cells is None:
            cells = {}
            self._rows[row] = cells
        cells[col] = value

    def __getitem__(self, key):
        row, col = key
        return self.get(row, col)

    def __setitem__(self, key, value):
        row, col = key
        self.set(row, col, value)

    def __str__(self):
        lines = []
        for r in range(self.num_rows):
            lines.append(", ".join(str(self.get(r, c)) for c in range(self.num_cols)))
        return "\n".join(lines)

    def __repr__(self):
        return f"SparseMatrix(rows={self.num_rows}, cols={self.num_cols}, stored={self.cells_written})"


class SparseArray:
    """One-dimensional sparse array stored in row 0 of a SparseMatrix.

    len() is the logical length (highest index written + 1); iterating
    yields every logical cell in index order, defaults included.
    """

    def __init__(self, default=0):
        self._backing = SparseMatrix(default=default)

    @property
    def default(self):
        return self._backing.default

    @property
    def cells_written(self):
        return self._backing.cells_written

    def __getitem__(self, index):
        return self._backing.get(0, index)

    def __setitem__(self, index, value):
        self._backing.set(0, index, value)

    def __len__(self):
        return self._backing.num_cols

    def __iter__(self):
        for i in range(len(self)):
            yield self._backing.get(0, i)

    def __str__(self):
        return "[" + ", ".join(str(v) for v in self) + "]"

    def __repr__(self):
        return f"SparseArray(len={len(self)}, stored={self.cells_written})"


class PartitionedSparseMatrix:
    """Sparse matrix whose cells live in independent fixed-size blocks.

    Each block is its own SparseMatrix keyed by
    (row // block_size, col // block_size), so no single dict has to hold
    the whole table. Same contract as SparseMatrix.

    Attributes:
        default: Value returned for cells that were never written
        block_size: Side length of each block
    """

    def __init__(self, default=0, block_size=DEFAULT_BLOCK_SIZE):
        if block_size <= 0:
            raise ValueError(f"block_size must be positive, got {block_size}")
        self.default = default
        self.block_size = block_size
        self._blocks = {}
        self._num_rows = 0
        self._num_cols = 0

    @property
    def num_rows(self):
        return self._num_rows

    @property
    def num_cols(self):
        return self._num_cols

    @property
    def num_blocks(self):
        return len(self._blocks)

    @property
    def cells_written(self):
        return sum(block.cells_written for block in self._blocks.values())

    def _block_key(self, row, col):
        return (row // self.block_size, col // self.block_size)

    def get(self, row, col):
        _check_index(row, col)
        block = self._blocks.get(self._block_key(row, col))
        if block is None:
            return self.default
        return block.get(row, col)

    def set(self, row, col, value):
        _check_index(row, col)
        key = self._block_key(row, col)
        block = self._blocks.get(key)
        if block is None:
            block = SparseMatrix(default=self.default)
            self._blocks[key] = block
        block.set(row, col, value)
        # Block extents are local to the block, track the global extent here
        if self._num_rows <= row:
            self._num_rows = row + 1
        if self._num_cols <= col:
            self._num_cols = col + 1

    def __getitem__(self, key):
        row, col = key
        return self.get(row, col)

    def __setitem__(self, key, value):
        row, col = key
        self.set(row, col, value)

    def __str__(self):
        lines = []
        for r in range(self.num_rows):
            lines.append(", ".join(str(self.get(r, c)) for c in range(self.num_cols)))
        return "\n".join(lines)

    def __repr__(self):
        return (f"PartitionedSparseMatrix(rows={self.num_rows}, cols={self.num_cols}, "
                f"blocks={self.num_blocks}, block_size={self.block_size})")
