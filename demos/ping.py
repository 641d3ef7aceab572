import asyncio
import sys

import httpx

from shellhttp import CAFileNotFoundError, NoAttemptsLeftError, new_http_client


def response_str(host: str, response: httpx.Response) -> str:
    sep = '-------------------------'
    string = f'\n{sep}\nHost: {host}\n'
    string += f'- {response.request.method} {response.url}\n'
    string += f'- Status: {response.status_code} {response.reason_phrase}\n'
    string += f'- Content-Type: {response.headers.get("Content-Type", "")}\n'
    string += sep
    return string


async def main() -> int:

    if len(sys.argv) < 2:
        url = input('Enter a target URL (http+unix://, http:// or https://): ').strip()
    else:
        url = sys.argv[1].strip()

    path = sys.argv[2] if len(sys.argv) > 2 else '/'

    try:
        http_client = new_http_client(url)
    except CAFileNotFoundError as exc:
        print(f'Missing CA file: {exc.filename}')
        return 1
    except ValueError as exc:
        print(f'Invalid target: {exc}')
        return 1

    exit_code = 1
    async with http_client:
        try:
            response = await http_client.client.get(path)
            print(response_str(http_client.host, response))
            exit_code = 0 if response.is_success else 1
        except (NoAttemptsLeftError, httpx.HTTPError) as exc:
            print(f'Error reaching {http_client.host}, check the target is up {exc}')

    return exit_code

if __name__ == '__main__':
    sys.exit(
        asyncio.run(main())
    )
