"""Manipulate fixed-width bit-vectors.

This package implements bit-vectors that behave as N-bit machine
registers: values are stored masked to their width, arithmetic wraps
around on overflow and every value has an unsigned and a two's
complement signed reading. The operators follow the semantics of the
bit-vector theory of the
`SMT_LIBv2 <http://smtlib.cs.uiowa.edu/theories-FixedSizeBitVectors.shtml>`_
format, with the addition of division rounding toward negative
infinity and width-changing operators taking a target width.

"""
