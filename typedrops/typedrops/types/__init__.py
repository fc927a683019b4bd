"""Type nodes, the compiler that builds them and the validator that walks them."""
