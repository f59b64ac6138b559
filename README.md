# liccheck

A library for checking software licences. A licence is an INI-style file
with one section per product. Section names are matched without regard to
case. Each section holds a signature (`sig`), a format version
(`lic_ver = 200`) and optional limits:

```ini
[MYPRODUCT]
lic_ver = 200
sig = placeholder
valid-from = 2024-01-01
valid-to = 2025-12-31
client-signature = AAAA-BBBB-CCCC
extra-data = anything
```

Dates may be written `YYYY-MM-DD`, `YYYY/MM/DD` or `YYYYMMDD`. They are read
as local midnight.

`liccheck` finds the licences that apply to a product and checks each
signature. It then checks the dates and the hardware binding. If several
licences pass, it keeps the one that lasts longest: a licence without an
expiry date wins; otherwise the one with the most days left is kept.

## Installing

```
pip install .
```

## Acquiring a licence

```python
from liccheck.api import acquire_license

result = acquire_license(
    project="MYPRODUCT",
    sources=["/etc/myproduct/license.lic"],
    signature_check=my_verify,   # callable(data: str, signature: str) -> bool
)
if result.ok:
    print(result.license.days_left)
```

`sources` is a list of paths, or a single string of paths separated by `;`.
If `project` is empty, the project name `DEFAULT` is used.

`acquire_license` returns an `AcquireResult`. It has these fields:

- `event`: the final `EventType`. This is `EventType.LICENSE_OK` on success. Otherwise it is the failure that explains the refusal.
- `ok`: true when `event` is `LICENSE_OK`.
- `license`: the merged `LicenseInfo`. It gives `has_expiry`, `expiry_date`, `days_left` (9999 when there is no expiry), `linked_to_pc` and `proprietary_data`. It also gives `status`, which holds the last five audit events.
- `registry`: the full `EventRegistry` of the check.

If a date in a licence cannot be read, `acquire_license` raises `ValueError`.

The signature of each licence is checked with the `signature_check` callable
you pass in. It receives the text produced by
`FullLicenseInfo.print_for_sign()` and the value of `sig`.

## Hardware identifiers

A hardware identifier is a short dash-separated string. It is built from a
description of the machine: its network adapters (MAC or IPv4 address) or
its disks (serial number or label). That description is a `HardwareSnapshot`
from `liccheck.strategies`. The snapshot holds `AdapterInfo` and `DiskInfo`
records.

```python
from liccheck.api import identify_pc
from liccheck.constants import Strategy
from liccheck.strategies import AdapterInfo, HardwareSnapshot

snapshot = HardwareSnapshot(
    adapters=(AdapterInfo(mac_address=bytes([0x02, 0, 0, 0, 0, 0x01])),),
)
print(identify_pc(Strategy.ETHERNET, snapshot))
```

`identify_pc` returns `None` when no identifier can be computed.

With `Strategy.DEFAULT`, the environment variable `IDENTIFICATION_STRATEGY`
can pick a strategy by number. Without that variable, the strategies listed
in the snapshot's `default_strategies` are tried in order.

A licence binds itself to a machine by carrying its identifier as
`client-signature`. To check that binding, use
`liccheck.facade.validate_pc_signature(code, hardware)`. Pass the same
snapshot to `acquire_license` through its `hardware` argument.

## What this package does not do

- It does not read the network adapters or disks of the machine it runs on. With no snapshot, or an empty one, no identifier can be computed.
- It has no built-in cryptography. You must supply the signature check.
- It does not issue or sign licences.
- It has no command-line tool.

## Other building blocks

| Module | Contents |
| --- | --- |
| `liccheck.constants` | `EventType`, `Severity`, `Strategy` and licence-file keys |
| `liccheck.b64` | line-wrapped base64 used by identifiers |
| `liccheck.strings` | trimming, date parsing, splitting, format detection |
| `liccheck.event_registry` | `EventRegistry` and `AuditEvent`, the audit trail of a check |
| `liccheck.files` | finding and reading licence files |
| `liccheck.hw_identifier` | `HwIdentifier`, parsing and printing identifiers |
| `liccheck.strategies` | identification strategies and the hardware snapshot |
| `liccheck.license_reader` | `LicenseReader` and `FullLicenseInfo` |
| `liccheck.license_verifier` | `LicenseVerifier` and `LicenseInfo` |

## Diagnostics

Diagnostic messages are appended to `open-license.log` in the temporary
directory. `liccheck.logger.log_path()` returns the location of that file.