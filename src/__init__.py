# Chat client service package.
