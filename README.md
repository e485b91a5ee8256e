# assurdesk

assurdesk keeps the day-to-day records of a small insurance agency in a
SQLite database:

- **clients**: identity card number (CIN), name, first name, address, phone
  and e-mail;
- **constats**: accident reports with ID, date, place, type, description and
  signature;
- **partenaires**: partner companies with their tax number (matricule
  fiscale), contact details, contract start and end dates, business sector,
  interest and an attached image file;
- **employés**: staff with CIN, hiring date, phone, position and salary.

On top of the records it offers searching and sorting, a small rule-based
chat assistant, share statistics drawn as pie and bar charts, PDF exports
of listed tables, and notices for partner contracts that have run out.

## Installation

```
pip install .
```

The tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Command line

Two commands are installed. Both take `--database PATH` (default
`projetons.db`); the tables are created in that file when missing.

```
assurdesk --help
assurdesk-legacy --help
```

### `assurdesk`

Commands take the form `assurdesk ENTITY ACTION ...`:

- `partner`: `add MATRICULE --image FILE [--nom --adresse --telephone
  --debut YYYY-MM-DD --fin YYYY-MM-DD --secteur --interet]`, `delete`,
  `update MATRICULE [--nom --adresse --telephone]`, `list`,
  `sort [--descending]` (by company name), `search TEXT`,
  `export [PATH]`, `stats PATH [--bars]` (share per business sector),
  `notify [--now ISO-DATETIME]` (expired contracts).
  `search` looks up an exact matricule when the text is five characters or
  fewer, and otherwise matches company names with SQL `LIKE`.
  `add` refuses to run without `--image`.
- `client`: `add CIN [--nom --prenom --adresse --telephone --email]`,
  `delete`, `update CIN [--telephone --adresse --email]`, `search CIN`,
  `list`, `sort` (by name), `export [PATH]`, `stats PATH` (share per town).
- `constat`: `add ID [--date --lieu --type --description --signature]`,
  `delete`, `update ID [--date --lieu --signature]`, `search ID`, `list`,
  `sort` (by type), `export [PATH]`, `stats PATH` (share per place).
- `employee`: `add CIN [--nom --prenom --date YYYY-MM-DD --email --numero
  --salaire --fonction]`, `list`, `sort` (by name), `search TEXT`,
  `export PATH`. After `add` the full list is printed.
- `chat MESSAGE...`: asks the assistant each message in turn and prints
  the questions and answers.

Tables are printed as tab-separated lines under a header line. Errors go to
standard error and the command exits with status 1.

### `assurdesk-legacy`

Works on the older partner layout, which records a contract duration
instead of start and end dates: `add MATRICULE [--nom --adresse
--telephone --duree --secteur --interet]`, `delete`, `list`,
`update-duration OLD NEW` (replaces every equal duration), `sort
[--column]` (only `DUREE_CONTRAT` is accepted), `search MATRICULE` and
`export [PATH]`.

## Library use

```python
from assurdesk.db import open_database, create_schema
from assurdesk.client import Client, ClientRepository
from assurdesk.chat import ChatBot

connection = open_database("agence.sqlite")
create_schema(connection)

clients = ClientRepository(connection)
for row in clients.list_all():
    print(row)

bot = ChatBot(connection)
print(bot.ask("bonjour"))
print(bot.history_text())
```

`assurdesk.db` holds `open_database`, `create_schema`, the `Table` result
type (headers plus rows of text, with `column(name)`) and the two errors.
Repositories raise `ValidationError` when a record or request breaks a
rule (a CIN longer than 20 characters, a matricule longer than 10, a phone
number shorter than 8 or longer than 15 characters, an unknown sort
column, a partner image that cannot be read) and `QueryError` when the
database refuses an operation. Deletes and updates return the number of
rows they touched.

The record modules are `client` (`Client`, `ClientRepository`), `constat`
(`Constat`, `ConstatRepository`), `partenaire` (`Partenaire`,
`PartenaireRepository`), `legacy_partenaire` (`LegacyPartenaire`,
`LegacyPartenaireRepository`) and `employe` (`Employe`,
`EmployeRepository`). Deleting and updating employees is available from
the library only. An employee search by CIN reads the text as a whole
number (0 when it is not one) and fills only the first six columns of
each row.

### Chat assistant

`ChatBot.generate_response` answers greetings ("bonjour", "salut"), a
question about the company Dabchy, and "matricule X", which looks up the
company name stored for tax number X. Anything else gets a request to
rephrase. `ask` also records the question in the history.

### Statistics

`assurdesk.statistics` computes the share of constats per place (Tunis,
Ben Arous, Gabès), clients per town (Tunis, Djerba, Zahra) and partners
per business sector (`constat_shares`, `client_shares`, `sector_shares`),
each as a list of `Share` entries; an empty table gives zero shares.
`share_label` formats a share with its percentage to two decimals.
`plot_pie` and `plot_bars` draw the shares into an image file and raise
`ValueError` when every share is zero.

### PDF reports

`assurdesk.report.table_layout` turns a `Table` into `DrawText` and
`DrawLine` operations, and `export_pdf` writes them to a PDF file. The
default `LISTING_STYLE` draws data rows at their index times the cell
height, so the first data row, which would sit under the headers, is left
out. `EMPLOYEE_STYLE` draws every row below the headers and refuses an
empty table with `ValidationError`.

### Contract notices

`assurdesk.notifications.expired_contracts` returns a `Notification`
(company, end date, title and message) for each partner whose contract
ends between 2022-01-01 and 2024-04-28 and whose end date has passed.
End dates are read as `YYYY-MM-DD` or `dd/MM/yy`. `search_partners`
chooses between a matricule search and a name search by the length of the
text.

## What it does not do

assurdesk has no graphical interface: there are no windows, dialogs,
image previews or desktop notifications. Everything is done through the
two commands or the library, and charts and reports are written to files.
Storage is a local SQLite file; it does not connect to a database server.