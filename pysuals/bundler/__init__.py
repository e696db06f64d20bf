"""Module dependency graph and chunk output for bundling."""