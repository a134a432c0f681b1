# licensekit

A library for reading and checking software licenses kept in INI documents.
It also builds the short hardware identifiers that can tie a license to one
machine.

## Modules

- `licensekit.licensing`: `acquire_license` reads, verifies and summarises
  the licenses of a project. It returns a `LicenseResult`, which holds the
  outcome `event` (an `EventType`), the chosen `license` (a `LicenseInfo`),
  the `registry` of events and an `ok` property. `merge_licenses` picks the
  license that expires last. A license without an expiry date wins at once.
- `licensekit.license_reader`: `LicenseReader` takes a list of sources and
  collects the product's section from each of them into a `FullLicenseInfo`.
  A source is either a file path or a `(reference, content)` pair.
  `FullLicenseInfo.print_for_sign()` gives the text that the signature
  covers.
- `licensekit.verifier`: `LicenseVerifier` checks a signature, then the
  magic number, `valid-to`, `valid-from` and `client-signature`.
  `to_license_info` returns a `LicenseInfo` with these fields:
  - `expiry_date`
  - `has_expiry`
  - `days_left` (9999 when the license has no expiry date)
  - `linked_to_pc`
  - `proprietary_data` (taken from `extra-data`)
- `licensekit.events`: `EventType`, `Severity`, `AuditEvent` and
  `EventRegistry`. The registry keeps the audit trail of every license
  reference. `last_failure()` reports the error that belongs to the license
  which got furthest in validation.
- `licensekit.hw_identifier`: `HwIdentifier` and the `Strategy` enum.
  An identifier is eight bytes and prints as dash-separated base64 groups
  through `str()`. `HwIdentifier.parse()` reads that printed form back and
  raises `ValueError` when the code has the wrong size.
- `licensekit.strategies`: three strategies build identifiers from machine
  information that you supply. `EthernetStrategy` uses `AdapterInfo` entries,
  from MAC addresses, or from IPv4 addresses when `use_ip=True`.
  `DiskStrategy` uses `DiskInfo` entries, from serial numbers and labels,
  with preferred disks first. `MotherboardDiskStrategy` uses serial-number
  strings, hashed with `fnv1a_32`. Each strategy has these methods:
  - `alternative_ids()`
  - `generate_pc_id()`, which raises `IdentifierUnavailable` when there is
    no identifier
  - `validate_identifier()`
- `licensekit.b64`: base64 `encode` with optional line wrapping, and a
  lenient `decode`.
- `licensekit.string_utils`: these helpers:
  - `trim`
  - `split_string`
  - `seconds_from_epoch`, which accepts `YYYYMMDD`, `YYYY-MM-DD` or
    `YYYY/MM/DD` as local midnight
  - `identify_format`, which returns a `FileFormat`
- `licensekit.file_utils`: `filter_existing_files`, `get_file_contents` and
  `remove_extension`.
- `licensekit.log`: `log()` appends time-stamped lines to `open-license.log`
  in the temporary directory, and `log_path()` gives its path.
  `shutdown_log()` closes the file.

## License file format

```ini
[MYPRODUCT]
lic_ver = 200
sig = <base64 signature>
valid-from = 2024-01-01
valid-to = 2030-12-31
client-signature = <hardware identifier>
extra-data = anything
```

The section name is compared with the project name in upper case.
A section counts as complete when it has `sig` and `lic_ver = 200`.
Sections without these keys are recorded as `LICENSE_MALFORMED`.

## Example

```python
from licensekit.events import EventType
from licensekit.hw_identifier import HwIdentifier
from licensekit.licensing import acquire_license
from licensekit.strategies import AdapterInfo, EthernetStrategy

strategy = EthernetStrategy([AdapterInfo(mac_address=bytes([2, 0, 0, 0, 0, 1, 0, 0]))])
print("this machine:", strategy.generate_pc_id())

result = acquire_license(
    ["/etc/myproduct/license.lic"],
    project="myproduct",
    signature_check=lambda data, signature: True,
    identifier_check=lambda code: strategy.validate_identifier(HwIdentifier.parse(code)),
)
if result.event is EventType.LICENSE_OK:
    print("licensed, days left:", result.license.days_left)
else:
    print("not licensed:", result.event.name)
```

The signature check is a callable you supply. It receives the signed text
and the signature, and returns whether they match. The identifier check
receives the `client-signature` value and returns an `EventType`. Without an
identifier check, a license tied to a machine never validates.

## What it does not do

- It does not verify signatures cryptographically. That is the job of the
  `signature_check` callable.
- It does not query the operating system for network adapters, disks or
  motherboard serial numbers. The strategies work on the `AdapterInfo`,
  `DiskInfo` and serial-number values they are given.
- It does not search for license files through environment variables.
  Licenses come only from the sources passed in.
- It offers no command-line tool.

## Tests

```
pip install -e .[test]
pytest
```