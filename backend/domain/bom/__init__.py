"""
BOM Domain - Bill of Materials.

Pure pricing and selection rules over snapshots of the catalogue:
- a Material has a unit price
- an Assembly holds material lines (material x quantity)
- a Template holds assembly lines (assembly x quantity)
- an Assembly Group constrains which assemblies of a category may be picked together
"""
