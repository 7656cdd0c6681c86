"""SCHOOLBUS test suite.

Folder taxonomy
- unit/         : Fast, isolated checks of one module; fakes instead of databases.
- contract/     : Behaviour every KeyedStore backend must share.
- integration/  : Real SQLite/Postgres databases, migrations and wiring.
- functional/   : User-visible CLI flows driven through CliRunner.
- e2e/          : Whole-CLI runs focused on logging and global options.
- fixtures/     : Shared pytest plugins (engines, test data). No tests here.

Markers are added per folder; property-based tests also carry `property`.
"""
