"""Source readers: files, manifests, lockfiles and shell probes."""
