# caduceus

`caduceus` connects to hosts over TLS, reads the certificate each one
presents and prints the domain names found in it. It is useful for mapping
IP space to the domains hosted there.

Certificates are fetched without verification, so self-signed and expired
certificates are still read.

## Installation

```
pip install .
```

## Usage

Targets can be given as a comma-separated list of IPs, hostnames, CIDR ranges
or `host:port` pairs:

```
caduceus -i 192.0.2.10,198.51.100.0/24
```

as a file with one target on each line (used when the `-i` value names an
existing file):

```
caduceus -i targets.txt
```

or on standard input when `-i` is not given:

```
cat targets.txt | caduceus
```

Every CIDR range is expanded to all of its addresses. A target that already
contains a `:` is dialled as given; any other target is tried on each port
given with `-p`. A CIDR that cannot be parsed stops the run with an error.

### Options

| Option    | Default | Meaning                                                        |
|-----------|---------|----------------------------------------------------------------|
| `-i`      | stdin   | Targets separated by commas, or a file with one per line       |
| `-p`      | `443`   | Comma-separated TLS ports to check                             |
| `-c`      | `100`   | Number of concurrent workers (values below 100 are raised to 100) |
| `-t`      | `4`     | Timeout in seconds for connecting and the TLS handshake        |
| `-j`      | off     | Print each certificate as one JSON object per line             |
| `-wc`     | off     | Print wildcard names such as `*.example.com` as well           |
| `-debug`  | off     | Report timeouts and connection failures                        |
| `-h`      | off     | Show usage                                                     |

The exit status is 0 on success, 1 when standard input cannot be read or a
network/file error ends the run, 2 for invalid input such as a bad CIDR, and
130 when interrupted.

### Output

By default each line holds a domain and the host it was found on (the port
is dropped):

```
www.example.com 192.0.2.10
example.com 192.0.2.10
```

The names come from the certificate's subject common name followed by its
DNS subject alternative names. Within one certificate each name is printed
only once. Names that are not valid domains are left out, and wildcard names
are left out unless `-wc` is given.

With `-j` each hit is written as compact JSON with the keys `originip`,
`org`, `orgunit`, `commonName`, `san`, `domains`, `emails` and `ips`; empty
lists are written as `null`.

With `-debug`, failed probes are reported as
`Timed Out. No SSL certificate found for <target>` or
`Failed to get SSL certificate from <target>: <error>`.

## Library use

```python
import sys

from caduceus.cli import parse_args
from caduceus.scrape import run_scrape

args = parse_args(["-i", "192.0.2.0/30", "-p", "443,8443"])
stats = run_scrape(args, sys.stdout)
print(stats.hits, stats.misses, stats.total, stats.hit_percentage())
```

- `caduceus.models` holds `ScrapeArgs`, `CertificateInfo` and `Result`.
- `caduceus.targets` expands inputs into `host:port` targets (`intake`,
  `process_input`, `ips_from_cidr`) and checks names (`is_valid_domain`,
  `is_wildcard`).
- `caduceus.certs` fetches a certificate (`get_ssl_cert`) and decodes it
  (`certificate_info`).
- `caduceus.workers` provides `probe`, `render_result` and `WorkerPool`,
  which probes targets on a fixed number of threads and yields `Result`s.
- `caduceus.stats.Stats` tallies hits and misses. Setting
  `ScrapeArgs.print_stats` makes `run_scrape` write a summary line at the
  end; there is no command-line option for this.

## Running the tests

```
pip install ".[test]"
pytest
```