# default k-mer length of a template switch inner
MINIMUMLENGTH = 15

# one of the keys of tsmatch.index.INDEX_BACKENDS
INDEXBACKEND = "suffix"

# 1 builds in the calling process, anything above uses a multiprocessing pool
NUMPROCESSES = 1
BATCHESPERPROCESS = 3

OUTPUTLOCATION = "io/outputs/matches.tsv"
